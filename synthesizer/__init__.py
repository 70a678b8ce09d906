from synthesizer.engine import Enricher

__all__ = ["Enricher"]
