"""
myroutine – class routine parser with a TTL-bounded parse cache.
"""
