import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

TRANSFER_TOOL = os.getenv("GRIDSTAGE_TRANSFER_TOOL", "gocmd")
VAULT_MOUNT = os.getenv("GRIDSTAGE_VAULT_MOUNT", "cubbyhole")
VAULT_TIMEOUT = os.getenv("GRIDSTAGE_VAULT_TIMEOUT", "30")
DENIED_USERS = frozenset(
    user.strip()
    for user in os.getenv("GRIDSTAGE_DENIED_USERS", "rods,root").split(",")
    if user.strip()
)
