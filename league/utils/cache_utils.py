"""
Cache utilities for the bowling league application

Read endpoints are cached; every write clears the cache so stats and
leaderboards are always recomputed from the current rows afterwards.
"""

import functools

from flask import current_app, jsonify, request

from league import cache


def make_cache_key(*args, **kwargs):
    """Generate a cache key from request path, query string and arguments"""
    path = request.path
    query = "&".join(f"{k}={v}" for k, v in sorted(request.args.items()))
    args_str = "_".join(str(arg) for arg in args)
    kwargs_str = "_".join(f"{k}_{v}" for k, v in sorted(kwargs.items()))
    return f"{path}?{query}_{args_str}_{kwargs_str}".replace("/", "_")


def cached_route(timeout=300, key_prefix="view"):
    """
    Decorator for caching JSON route responses

    The view returns plain data; that data (not the Response) is cached
    and jsonified on the way out.

    Args:
        timeout: Cache timeout in seconds (default 5 minutes)
        key_prefix: Prefix for cache key
    """

    def decorator(f):
        @functools.wraps(f)
        def wrapped(*args, **kwargs):
            cache_key = f"{key_prefix}_{make_cache_key(*args, **kwargs)}"

            result = cache.get(cache_key)
            if result is not None:
                current_app.logger.debug(f"Cache hit for key: {cache_key}")
                return jsonify(result)

            result = f(*args, **kwargs)
            cache.set(cache_key, result, timeout=timeout)
            current_app.logger.debug(f"Cache set for key: {cache_key}")

            return jsonify(result)

        return wrapped

    return decorator


def invalidate_league_cache(reason):
    """
    Drop every cached response after a write

    Args:
        reason: What changed, for the log
    """
    cache.clear()
    current_app.logger.debug(f"Cache cleared after {reason}")
