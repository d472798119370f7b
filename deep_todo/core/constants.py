"""Constants used throughout the Deep To-Do client."""


# Remote task service
DEFAULT_API_URL = "https://deepideabackend.onrender.com"
TASKS_ENDPOINT = "/tasks"
STATS_ENDPOINT = "/tasks/analytics/stats"

# Timeout values
DEFAULT_TIMEOUT = 30  # seconds

# Local client state
DATA_DIR_NAME = ".deep-todo"
DATA_DIR_ENV_VAR = "DEEP_TODO_HOME"
API_URL_ENV_VAR = "DEEP_TODO_API_URL"
SESSION_FILE_NAME = "session.json"
CONFIG_FILE_NAME = "config.json"
TOKEN_KEY = "token"

# Reminders
DEFAULT_REMINDER_HORIZON_MINUTES = 60
REMINDER_MESSAGE = "Reminder: You have tasks due within the next {window}!"

# Filter View
FILTER_ALL = "all"

# Display
SHORT_ID_LENGTH = 8
EMPTY_LIST_MESSAGE = "No tasks found. You're all caught up!"
