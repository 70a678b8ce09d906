from filters.normalizer import normalize, normalize_batch, strip_html
from filters.selector import parse_id, select_new

__all__ = ["normalize", "normalize_batch", "strip_html", "parse_id", "select_new"]
