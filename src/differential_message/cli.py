from __future__ import annotations

import argparse
import json
import os
import shlex
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

import httpx

from differential_message.core.amend import AmendWorkflow
from differential_message.core.conduit import (
    ConduitClient,
    ConduitClientError,
    ConduitParsingService,
    resolve_conduit_config,
)
from differential_message.core.confirm import console_confirm
from differential_message.core.errors import (
    CommitMessageParserError,
    TestRunnerError,
    UsageError,
    UserAbortError,
)
from differential_message.core.git_repository import GitRepository
from differential_message.core.logging_config import configure_logging
from differential_message.core.models import TestStatus
from differential_message.core.parser import GIT_SVN_CONFIG_KEY, GitSVNGate, parse
from differential_message.core.sync import synchronize
from differential_message.core.unit import BusterJSEngine
from differential_message.core.working_copy import WorkingCopyConfig
from differential_message.tools.commit_message import message_to_dict


def _conduit_client() -> ConduitClient:
    return ConduitClient.from_config(resolve_conduit_config())


def _edit_in_editor(text: str) -> str:
    editor = os.getenv("VISUAL") or os.getenv("EDITOR") or "vi"
    with tempfile.NamedTemporaryFile("w+", suffix=".txt", prefix="amend-message-", delete=False) as f:
        f.write(text)
        path = f.name
    try:
        subprocess.run([*shlex.split(editor), path], check=True)
        return Path(path).read_text(encoding="utf-8")
    finally:
        os.unlink(path)


def _cmd_parse(args: argparse.Namespace, config: WorkingCopyConfig) -> int:
    corpus = sys.stdin.read() if args.message == "-" else Path(args.message).read_text(encoding="utf-8")

    if args.git_svn is not None:
        config.set_runtime_config(GIT_SVN_CONFIG_KEY, args.git_svn)
    message = parse(corpus, gate=GitSVNGate(config, console_confirm))

    errors: list[str] = []
    if args.sync:
        with _conduit_client() as client:
            try:
                synchronize(message, ConduitParsingService(client), partial=args.partial)
            except CommitMessageParserError as e:
                errors = e.errors

    out = message_to_dict(message)
    if args.sync:
        out["errors"] = errors
    print(json.dumps(out, indent=2, sort_keys=True))
    return 1 if errors else 0


def _cmd_amend(args: argparse.Namespace, config: WorkingCopyConfig) -> int:
    template = Path(args.template).read_text(encoding="utf-8")
    with _conduit_client() as client:
        workflow = AmendWorkflow(
            client,
            GitRepository(config),
            confirm=console_confirm,
            edit=_edit_in_editor,
        )
        message = workflow.run(template, revision=args.revision, show=args.show)
    if args.show:
        print(message)
    return 0


def _cmd_unit(args: argparse.Namespace, config: WorkingCopyConfig) -> int:
    results = BusterJSEngine(config).run()
    failed = 0
    for r in results:
        print(f"[{r.status.value.upper()}] {r.name} ({r.duration:.3f}s)")
        if r.user_data:
            print(r.user_data)
        failed += r.status is TestStatus.FAIL
    print(f"\n{len(results)} tests, {failed} failed.")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="differential-message",
        description="Parse and sync Differential commit messages.",
    )
    p.add_argument("--root", default=None, help="Working copy root (default: current directory)")
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("parse", help="Parse a commit message file ('-' for stdin)")
    sp.add_argument("message")
    sp.add_argument("--sync", action="store_true", help="Validate fields against the Conduit server")
    sp.add_argument("--partial", action="store_true", help="With --sync, allow missing required fields")
    sp.add_argument("--git-svn", dest="git_svn", action="store_true", default=None,
                    help="Treat git-svn-id lines as real git-svn provenance")
    sp.add_argument("--no-git-svn", dest="git_svn", action="store_false", default=None,
                    help="Ignore git-svn-id lines")
    sp.set_defaults(func=_cmd_parse)

    ap = sub.add_parser("amend", help="Amend HEAD with an accepted revision's message")
    ap.add_argument("--template", required=True, help="Commit template ($name placeholders)")
    ap.add_argument("--revision", default=None, help="Revision to amend (e.g. D123)")
    ap.add_argument("--show", action="store_true",
                    help="Print the amended message without modifying the working copy")
    ap.set_defaults(func=_cmd_amend)

    up = sub.add_parser("unit", help="Run BusterJS tests")
    up.set_defaults(func=_cmd_unit)
    return p


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()
    config = WorkingCopyConfig.from_path(args.root or os.getcwd())

    try:
        code = args.func(args, config)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (UsageError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)
    except UserAbortError:
        print("Aborted.", file=sys.stderr)
        raise SystemExit(1)
    except (ConduitClientError, httpx.HTTPError, TestRunnerError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    raise SystemExit(code)


if __name__ == "__main__":
    main()
