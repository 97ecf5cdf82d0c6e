"""
Shared service utilities.

- http.py - pre-configured ``requests.Session`` (timeout, no-retry policy)
"""
