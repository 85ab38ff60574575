"""Role constants and helpers.

Users carry a single role.  Courses flagged as mandatory name the role
they apply to, or ``ALL`` for every user.  Keeping these values in one
place makes the access model easy to audit.
"""

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"
MANDATORY_ALL = "ALL"

QUESTION_SINGLE_CHOICE = "single_choice"
QUESTION_MULTIPLE_CHOICE = "multiple_choice"
QUESTION_TRUE_FALSE = "true_false"
QUESTION_TEXT = "text"


def is_admin(role: str) -> bool:
    return role == ROLE_ADMIN


def mandatory_roles_for(role: str) -> list[str]:
    """Return the ``mandatory_for_role`` values that apply to ``role``."""
    return [role, MANDATORY_ALL]
