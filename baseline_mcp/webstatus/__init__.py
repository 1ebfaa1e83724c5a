from .proxy import DEFAULT_LIMIT, MAX_LIMIT, MIN_LIMIT, WebStatusProxy, build_features_url, clamp_limit

__all__ = ["WebStatusProxy", "build_features_url", "clamp_limit", "DEFAULT_LIMIT", "MIN_LIMIT", "MAX_LIMIT"]
