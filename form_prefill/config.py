"""Global configuration constants for form-prefill."""

from pathlib import Path

# Blueprint input
DEFAULT_BLUEPRINT_PATH = Path("blueprint.json")
BLUEPRINT_ENV_VAR = "FORM_PREFILL_BLUEPRINT"

# Global source groups
ACTION_SOURCE_ID = "global-action-properties"
ACTION_SOURCE_NAME = "Action Properties"
ACTION_PATH_PREFIX = "Action"

ORG_SOURCE_ID = "global-org-properties"
ORG_SOURCE_NAME = "Organization Properties"
ORG_PATH_PREFIX = "clientOrg"

# Property lists used when a blueprint asks for default globals
DEFAULT_ACTION_PROPERTIES = [
    "status", "created_at", "updated_at", "assignee", "priority", "due_date",
]
DEFAULT_CLIENT_ORG_PROPERTIES = [
    "org_name", "org_id", "plan_type", "industry", "created_date", "contact_email",
]

# Field type used when a blueprint names an unknown one
FALLBACK_FIELD_TYPE = "text"
