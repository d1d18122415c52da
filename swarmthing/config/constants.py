"""Hard-coded configuration constants not meant to be user-configurable."""

DEFAULT_STATE_DIRNAME = ".swarmthing"
DEFAULT_TOOLS_DIRNAME = "tools"
TOOL_FILE_SUFFIX = ".py"
MAX_SAFE_CODE_LENGTH = 10_000
UNKNOWN_SENDER = "unknown"
