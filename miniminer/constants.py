# Pow
DIGEST_SIZE = 32  # sha256 digest size in bytes
MAX_DIFFICULTY = DIGEST_SIZE * 8  # anything above this can never be satisfied
PROGRESS_INTERVAL = 10000  # how many attempts between progress callbacks

# Block data values that can be rendered into the payload
SCALAR_TYPES = (str, int, bool)

# Challenge service
ENDPOINT_TEMPLATE = "{domain}/challenges/mini_miner/{phase}"
PROBLEM_PHASE = "problem"
SOLVE_PHASE = "solve"
REQUEST_TIMEOUT = 10  # seconds

# Search
DEFAULT_WORKERS = 1
