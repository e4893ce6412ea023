RET_CODE_OK = 0

# seconds a successful response may be cached by the client
RESP_EXPIRES_SECONDS = 5

# prefix of the Authorization header carrying a caller token
AUTH_HEADER_PREFIX = "Bearer"
