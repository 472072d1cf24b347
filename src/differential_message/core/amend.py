"""Amend HEAD with the commit message of an accepted revision.

The workflow fetches the revision's commit data, renders it through a
commit template, lets the operator edit the result, amends the working copy
and finally closes the revision.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from string import Template
from typing import Any, Protocol

from .conduit import ConduitClient, ConduitClientError
from .confirm import ConfirmFn
from .errors import UsageError, UserAbortError
from .markers import parse_revision_token

logger = logging.getLogger(__name__)

EditFn = Callable[[str], str]


class RepositoryAPI(Protocol):
    """VCS operations the amend workflow needs."""

    def supports_amend(self) -> bool: ...

    def has_uncommitted_changes(self) -> bool: ...

    def is_history_immutable(self) -> bool: ...

    def working_copy_revision_ids(self) -> Iterable[int]: ...

    def amend_commit(self, message: str) -> None: ...


def normalize_revision_id(value: str | int) -> int:
    """Accept ``D123``, ``123`` or an int and return the numeric ID."""
    if isinstance(value, int):
        return value
    revision_id = parse_revision_token(value.strip())
    if revision_id is None:
        raise UsageError(f"Invalid revision '{value}'. Expected something like 'D123'.")
    return revision_id


def strip_comment_lines(body: str) -> str:
    """Drop lines that start with ``#``."""
    return "\n".join(line for line in body.split("\n") if not line.startswith("#"))


def render_commit_template(template: str, data: Mapping[str, Any]) -> str:
    """Fill ``$name`` placeholders; unknown placeholders are left in place."""
    return Template(template).safe_substitute({k: "" if v is None else v for k, v in data.items()})


def select_revision_id(requested: str | int | None, in_working_copy: Iterable[int]) -> int:
    """Pick the revision to amend: the requested one, else the only one present."""
    if requested is not None:
        return normalize_revision_id(requested)

    found = sorted(set(in_working_copy))
    if not found:
        raise UsageError(
            "No revision specified with '--revision', and no revisions found in "
            "the working copy. Use '--revision <id>' to specify which revision "
            "you want to amend."
        )
    if len(found) > 1:
        listing = "\n".join(f"  D{rid}" for rid in found)
        raise UsageError(
            "More than one revision was found in the working copy:\n"
            f"{listing}\n"
            "Use '--revision <id>' to specify which revision you want to amend."
        )
    return found[0]


class AmendWorkflow:
    def __init__(
        self,
        conduit: ConduitClient,
        repository: RepositoryAPI,
        *,
        confirm: ConfirmFn,
        edit: EditFn,
    ) -> None:
        self.conduit = conduit
        self.repository = repository
        self.confirm = confirm
        self.edit = edit

    def _check_repository(self) -> None:
        repo = self.repository
        if not repo.supports_amend():
            raise UsageError(
                "You may only amend in a git or hg (version 2.2 or newer) working copy."
            )
        if repo.is_history_immutable():
            raise UsageError(
                "This project is marked as adhering to a conservative history "
                "mutability doctrine (having an immutable local history), which "
                "precludes amending commit messages."
            )
        if repo.has_uncommitted_changes():
            raise UsageError(
                "You have uncommitted changes in this branch. Stage and commit "
                "(or revert) them before proceeding."
            )

    def _commit_data(self, revision_id: int) -> dict[str, Any]:
        try:
            data = self.conduit.call_method_synchronous(
                "differential.getcommitdata",
                {"revision_id": revision_id, "edit": False},
            )
        except ConduitClientError as e:
            if "ERR_NOT_FOUND" not in str(e):
                raise
            raise UsageError(f"Revision D{revision_id} does not exist.") from e
        if isinstance(data, Mapping):
            return dict(data)
        # Older servers return the rendered message as a plain string.
        return {"message": data}

    def _revision_title(self, revision_id: int) -> str:
        found = self.conduit.call_method_synchronous(
            "differential.query", {"ids": [revision_id]}
        )
        if not found:
            raise LookupError(f"Failed to lookup information for 'D{revision_id}'!")
        return found[0]["title"]

    def run(self, template: str, *, revision: str | int | None = None, show: bool = False) -> str:
        """Return the rendered message; unless ``show``, also amend and close."""
        if not show:
            self._check_repository()

        in_working_copy = set(self.repository.working_copy_revision_ids())
        revision_id = select_revision_id(revision, in_working_copy)

        data = self._commit_data(revision_id)
        title = self._revision_title(revision_id)

        if not show and revision_id not in in_working_copy:
            ok = self.confirm(
                f"The revision 'D{revision_id}' does not appear to be in the working "
                "copy. Are you sure you want to amend HEAD with the commit message "
                f"for 'D{revision_id}: {title}'?",
                default=False,
            )
            if not ok:
                raise UserAbortError()

        message = render_commit_template(
            template, {**data, "revision_id": revision_id, "title": title}
        )
        if show:
            return message

        logger.info("Amending commit message to reflect revision D%s: %s", revision_id, title)
        message = strip_comment_lines(self.edit(message))
        self.repository.amend_commit(message)

        self.conduit.call_method_synchronous(
            "differential.close", {"revisionID": revision_id}
        )
        return message
