"""Print a long-lived access token for an existing user id.

Usage:
    python create_token.py <user id> [days]
"""
import sys

from devconnector_api.app.core.security import create_access_token

if len(sys.argv) < 2:
    sys.exit(__doc__)

days = int(sys.argv[2]) if len(sys.argv) > 2 else 365
token = create_access_token({"sub": sys.argv[1]}, expires_delta=days * 24 * 60 * 60)
print(token)
