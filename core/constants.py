# core/constants.py

# --- Activity actions (Standard Registry) ---

ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"
ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"
ACTION_SIGNUP = "signup"
ACTION_RESUBMIT = "resubmit"
ACTION_BAN = "ban"
ACTION_UNBAN = "unban"
ACTION_ROLE_CHANGE = "role_change"

# --- Entities ---

ENTITY_GAME = "game"
ENTITY_GAME_CATEGORY = "game_category"
ENTITY_REGISTRATION = "registration"
ENTITY_TEAM = "team"
ENTITY_USER = "user"

# --- Activity log paging ---

ACTIVITY_LOG_DEFAULT_LIMIT = 50
ACTIVITY_LOG_MAX_LIMIT = 100
