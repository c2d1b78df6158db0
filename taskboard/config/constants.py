"""
Application constants
"""

# Task backend (json-server style mock)
TASKS_API_BASE_URL = "http://localhost:3000"
TASKS_ENDPOINT = "tasks"

# npm-trends proxy used by the MCP tools
REGISTRY_PROXY_BASE_URL = "https://npm-trends-proxy.uidotdev.workers.dev"
GITHUB_REPOS_ENDPOINT = "github/repos"
NPM_REGISTRY_ENDPOINT = "npm/registry"

# MCP server
MCP_SERVER_NAME = "taskboard-tools"

# Board columns, in display order
BOARD_COLUMNS = ("todo", "in_progress", "completed")
DEFAULT_STATUS = "todo"
OVER_BUDGET_STATUS = "overdue"

# Priority sort rank (lower sorts first)
PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}

# Request defaults
REQUEST_TIMEOUT = 30  # seconds

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY = 1  # seconds

# Logging
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
