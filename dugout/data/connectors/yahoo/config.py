"""Shared Yahoo provider constants.

This module centralizes URLs and collection parameters used by the REST
endpoints and the OAuth layer so the connector itself stays small.
"""

from __future__ import annotations

# Fantasy Sports v2 REST API
FANTASY_BASE_URL = "https://fantasysports.yahooapis.com/fantasy/v2"

# OAuth 2.0 endpoints
TOKEN_URL = "https://api.login.yahoo.com/oauth2/get_token"
REVOKE_URL = "https://api.login.yahoo.com/oauth2/revoke"

GAME_CODE = "mlb"

# Players collection parameters
SORT_ACTUAL_RANK = "AR"  # upstream's canonical performance ranking
STATUS_ACTIVE = "A"
MAX_PLAYERS_PER_REQUEST = 25

# Every request asks for the JSON rendering of the resource
RESPONSE_FORMAT = {"format": "json"}
