"""BusterJS test runner wrapper.

Configured through working-copy config keys:

- ``unit.busterjs.config``: path to the buster config file (relative to the
  project root).
- ``unit.busterjs.prefix``: directory holding the binary; when unset the
  binary is looked up on PATH.
- ``unit.busterjs.bin``: binary name (default ``buster-test``).
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import xml.etree.ElementTree as ET
from pathlib import Path

from ..errors import TestRunnerError, UsageError
from ..models import TestResult, TestStatus
from ..working_copy import WorkingCopyConfig

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "buster-test"


def parse_buster_results(stdout: str, stderr: str = "") -> list[TestResult]:
    """Convert buster's JUnit-style XML report into TestResult records."""
    if stderr.strip():
        raise TestRunnerError(stderr)

    try:
        suites = ET.fromstring(stdout)
    except ET.ParseError as e:
        # Usually means the config selected no test files.
        logger.warning("Could not parse BusterJS output as XML: %s", e)
        return []

    results: list[TestResult] = []
    for suite in suites:
        for case in suite:
            failure = case.find("failure")
            if failure is not None:
                status = TestStatus.FAIL
                user_data = failure.text or ""
            else:
                status = TestStatus.PASS
                user_data = ""

            try:
                duration = float(case.get("time", 0) or 0)
            except ValueError:
                duration = 0.0

            results.append(
                TestResult(
                    name=f"{case.get('classname', '')}.{case.get('name', '')}",
                    status=status,
                    duration=duration,
                    user_data=user_data,
                )
            )
    return results


class BusterJSEngine:
    def __init__(self, config: WorkingCopyConfig) -> None:
        self.config = config

    def options(self) -> list[str]:
        opts = ["--reporter", "xml"]
        config_file = self.config.get_config("unit.busterjs.config")
        if config_file is not None:
            path = (self.config.project_root / config_file).resolve()
            if not path.exists():
                raise UsageError(
                    "Unable to find the config file defined by 'unit.busterjs.config'. "
                    "Make sure that the path is correct."
                )
            opts += ["--config", str(path)]
        return opts

    def binary(self) -> str:
        prefix = self.config.get_config("unit.busterjs.prefix")
        name = self.config.get_config("unit.busterjs.bin") or DEFAULT_BINARY

        if prefix is not None:
            path = Path(prefix) / name
            if not path.exists():
                raise UsageError(
                    "Unable to find BusterJS binary in a specified directory. Make sure "
                    "that 'unit.busterjs.prefix' and 'unit.busterjs.bin' keys are set "
                    "correctly."
                )
            return str(path)

        found = shutil.which(name)
        if found is None:
            raise UsageError(
                "BusterJS does not appear to be installed on this system. Install it "
                "(e.g., with 'npm install buster -g') or configure "
                "'unit.busterjs.prefix' to point to the directory where it resides."
            )
        return found

    def run(self) -> list[TestResult]:
        cmd = [self.binary(), *self.options()]
        logger.debug("Running %s in %s", cmd, self.config.project_root)
        proc = subprocess.run(
            cmd,
            cwd=self.config.project_root,
            capture_output=True,
            text=True,
            check=False,
        )
        return parse_buster_results(proc.stdout, proc.stderr)
