DEBUG_BRIDGE = False

API_BASE_URL = "http://localhost:5000/api"
REQUEST_TIMEOUT = 30.0

# Cookie holding the bearer token of the signed-in user
SESSION_TOKEN_COOKIE = "token"
