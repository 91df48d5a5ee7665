import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

# Number of identities returned for GET_USERS
RANDOM_USERS_COUNT = int(os.getenv("RANDOM_USERS_COUNT", 5))
SEARCH_RESULTS_LIMIT = int(os.getenv("SEARCH_RESULTS_LIMIT", 20))

# Per-connection outbound buffer; messages beyond this are dropped
OUTBOUND_QUEUE_SIZE = int(os.getenv("OUTBOUND_QUEUE_SIZE", 256))

# Also remove a user from the invite list when they reject a transfer request
REMOVE_ON_REJECT = os.getenv("REMOVE_ON_REJECT", "false").lower() in ("1", "true", "yes")

# Colors chosen to fit the client color scheme
COLOR_PALETTE = ["#FBE8A6", "#F4976C", "#B4DFE5", "#D2FDFF", "#C5CBE3"]

DISPLAY_NAME_WORDS = 2
