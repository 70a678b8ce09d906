from pipeline.runner import Relay, all_ok

__all__ = ["Relay", "all_ok"]
