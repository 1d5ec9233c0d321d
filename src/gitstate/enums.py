"""Enumeration types for gitstate."""

from enum import StrEnum


class ServiceState(StrEnum):
    """Availability of the git service.

    Derived solely from whether a repository collaborator is bound:
    - OK: A repository is bound and commands can be dispatched
    - VCS_NOT_FOUND: No git executable or repository could be bound
    """

    OK = "ok"
    VCS_NOT_FOUND = "vcs_not_found"


class RefType(StrEnum):
    """Kinds of git references."""

    HEAD = "head"
    REMOTE_HEAD = "remote_head"
    TAG = "tag"


class GitErrorCode(StrEnum):
    """Well-known git failure conditions inferred from command output."""

    BAD_CONFIG_FILE = "bad_config_file"
    AUTHENTICATION_FAILED = "authentication_failed"
    NO_USER_NAME_CONFIGURED = "no_user_name_configured"
    NO_USER_EMAIL_CONFIGURED = "no_user_email_configured"
    NO_REMOTE_REPOSITORY_SPECIFIED = "no_remote_repository_specified"
    NOT_A_GIT_REPOSITORY = "not_a_git_repository"
    NOT_AT_REPOSITORY_ROOT = "not_at_repository_root"
    CONFLICT = "conflict"
    UNMERGED_CHANGES = "unmerged_changes"
    PUSH_REJECTED = "push_rejected"
    REMOTE_CONNECTION_ERROR = "remote_connection_error"
    DIRTY_WORK_TREE = "dirty_work_tree"
    CANT_OPEN_RESOURCE = "cant_open_resource"
    GIT_NOT_FOUND = "git_not_found"
    CANT_CREATE_PIPE = "cant_create_pipe"
    CANT_ACCESS_REMOTE = "cant_access_remote"
    REPOSITORY_NOT_FOUND = "repository_not_found"
