"""Constants used across the mark stager."""

# Prefix for the temporary working copy directory
TEMP_DIR_PREFIX = "mark-stager-"

# Git status query arguments (NUL separated, stable porcelain format, ignored files included)
STATUS_ARGS = ["status", "--porcelain=v1", "-z", "--untracked-files=all", "--ignored"]

# Environment variables that point git at a repository other than the working directory's
GIT_REPOSITORY_ENV_VARS = {
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_COMMON_DIR",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
    "GIT_NAMESPACE",
    "GIT_PREFIX",
}

# Name of the git metadata entry at a working copy root
GIT_METADATA_NAME = ".git"

# Two-character porcelain codes reported for unmerged paths
UNMERGED_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

# Porcelain codes for untracked and ignored paths
UNTRACKED_CODE = "??"
IGNORED_CODE = "!!"

# Porcelain status letters that carry an additional original path field
RENAME_OR_COPY_CODES = {"R", "C"}

# Constants for error messages
UNKNOWN_ERROR_MESSAGE = "Unknown error"

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

# Environment variable names
ENV_REPO = "MARK_STAGER_REPO"
ENV_AUTO_FILES = "MARK_STAGER_AUTO_FILES"
ENV_IN_PLACE = "MARK_STAGER_IN_PLACE"
ENV_ATOMIC = "MARK_STAGER_ATOMIC"
ENV_LOG_LEVEL = "MARK_STAGER_LOG_LEVEL"
ENV_GIT = "MARK_STAGER_GIT"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
