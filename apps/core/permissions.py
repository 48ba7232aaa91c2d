"""
Authorization guard shared by the tasks and reports apps.

Every access decision goes through one decision table keyed by
(resource, relationship). The relationship of a caller to a record is:

- admin:     caller has the admin role (wins over everything else)
- assignee:  task.assigned_to is the caller
- author:    report.author is the caller
- public:    report is public and the caller is not its author
- member:    any other authenticated caller (used for create checks,
             where there is no record yet)

List visibility is handled by the scope clauses in each app's filters
module; this module only answers yes/no for one caller and one record.
"""

from django.core.exceptions import PermissionDenied


TASK = 'task'
REPORT = 'report'

READ = 'read'
CREATE = 'create'
UPDATE = 'update'
DELETE = 'delete'
COMMENT = 'comment'

ALL_OPERATIONS = frozenset({READ, CREATE, UPDATE, DELETE, COMMENT})

ADMIN = 'admin'
ASSIGNEE = 'assignee'
AUTHOR = 'author'
PUBLIC = 'public'
MEMBER = 'member'


DECISION_TABLE = {
    (TASK, ADMIN): ALL_OPERATIONS,
    (TASK, ASSIGNEE): frozenset({READ, UPDATE, COMMENT}),
    (TASK, MEMBER): frozenset(),
    (REPORT, ADMIN): ALL_OPERATIONS,
    (REPORT, AUTHOR): ALL_OPERATIONS,
    (REPORT, PUBLIC): frozenset({READ, COMMENT}),
    (REPORT, MEMBER): frozenset({CREATE}),
}

# Fields a caller may not change through update, by relationship
RESTRICTED_UPDATE_FIELDS = {
    (TASK, ASSIGNEE): frozenset({'assigned_to', 'assigned_by', 'priority'}),
    (REPORT, AUTHOR): frozenset({'status', 'approved_by', 'approved_at'}),
}

DENIAL_MESSAGES = {
    (TASK, READ): 'Not authorized to access this task.',
    (TASK, CREATE): 'Only administrators can create tasks.',
    (TASK, UPDATE): 'Not authorized to update this task.',
    (TASK, DELETE): 'Only administrators can delete tasks.',
    (TASK, COMMENT): 'Not authorized to comment on this task.',
    (REPORT, READ): 'Not authorized to access this report.',
    (REPORT, CREATE): 'Not authorized to create reports.',
    (REPORT, UPDATE): 'Not authorized to update this report.',
    (REPORT, DELETE): 'Not authorized to delete this report.',
    (REPORT, COMMENT): 'Not authorized to comment on this report.',
}


def is_admin(user):
    """Check if the caller has the admin role."""
    return getattr(user, 'role', None) == ADMIN


def get_relationship(user, resource, record=None):
    """
    Classify the caller's relationship to a record.

    Args:
        user: Authenticated caller (needs pk and role)
        resource: TASK or REPORT
        record: Task or Report instance, or None for create checks

    Returns:
        One of ADMIN, ASSIGNEE, AUTHOR, PUBLIC, MEMBER
    """
    if is_admin(user):
        return ADMIN

    if record is None:
        return MEMBER

    if resource == TASK:
        if record.assigned_to_id == user.pk:
            return ASSIGNEE
        return MEMBER

    if resource == REPORT:
        if record.author_id == user.pk:
            return AUTHOR
        if record.is_public:
            return PUBLIC
        return MEMBER

    raise ValueError(f'Unknown resource: {resource}')


def can(user, resource, operation, record=None):
    """Return True if the decision table allows the operation."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    relationship = get_relationship(user, resource, record)
    return operation in DECISION_TABLE.get((resource, relationship), frozenset())


def check_permission(user, resource, operation, record=None):
    """
    Raise PermissionDenied unless the operation is allowed.

    Denials are never turned into empty results; callers get a 403.
    """
    if not can(user, resource, operation, record):
        raise PermissionDenied(DENIAL_MESSAGES[(resource, operation)])


def restricted_fields(user, resource, record):
    """Fields the caller may not set when updating this record."""
    relationship = get_relationship(user, resource, record)
    return RESTRICTED_UPDATE_FIELDS.get((resource, relationship), frozenset())


def strip_restricted_fields(user, resource, record, data):
    """
    Drop the fields the caller may not change from an update payload.

    The rest of the payload is kept, so a partially disallowed update
    still applies its allowed fields.
    """
    blocked = restricted_fields(user, resource, record)
    return {key: value for key, value in data.items() if key not in blocked}
