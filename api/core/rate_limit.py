"""
Rate limiting shared by the app and the v1 routers
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
