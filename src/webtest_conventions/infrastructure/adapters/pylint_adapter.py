"""Pylint subprocess adapter: runs the convention checker and collects its findings."""

import os
import re
import subprocess
import sys
from collections import defaultdict

from webtest_conventions.domain.config import ConfigurationLoader
from webtest_conventions.domain.constants import IDENTIFIERS
from webtest_conventions.domain.entities import LinterResult
from webtest_conventions.domain.protocols import LinterAdapterProtocol

PLUGIN_MODULE = "webtest_conventions.checker"
MSG_TEMPLATE = "{path}:{line}: {msg_id}: {msg} ({symbol})"
ERROR_CODE = "WEBTEST_ERROR"


class PylintAdapter(LinterAdapterProtocol):
    """Runs pylint with only the convention checker enabled and groups its output by code."""

    LINTER = "webtest-conventions"

    def __init__(self, config_loader: ConfigurationLoader) -> None:
        self._config_loader = config_loader

    def build_command(self, target_path: str) -> list[str]:
        cmd = [
            sys.executable,
            "-m",
            "pylint",
            target_path,
            f"--load-plugins={PLUGIN_MODULE}",
            "--disable=all",
            f"--enable={','.join(sorted(IDENTIFIERS))}",
            f"--msg-template={MSG_TEMPLATE}",
            "--score=n",
        ]
        exclude = self._config_loader.exclude_paths
        if exclude:
            regex = "|".join([rf".*{re.escape(p)}.*" for p in exclude])
            cmd.append(f"--ignore-paths={regex}")
        return cmd

    def gather_results(self, target_path: str) -> list[LinterResult]:
        """Run pylint on target_path; a failure to start becomes a single error result."""
        env = os.environ.copy()
        env.setdefault("PYTHONPATH", "src")
        try:
            result = subprocess.run(
                self.build_command(target_path),
                env=env,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            return [LinterResult(ERROR_CODE, str(e), [])]
        return self.parse_output(result.stdout)

    @staticmethod
    def parse_output(output: str) -> list[LinterResult]:
        # Pattern: path:line: msg_id: msg (symbol)
        pattern = re.compile(r"^(.*?):(\d+): (W95\d\d): (.*) \(([\w-]+)\)$")
        collected: dict[str, dict[str, object]] = defaultdict(
            lambda: {"message": "", "locations": set()})
        for line in output.splitlines():
            match = pattern.match(line)
            if not match:
                continue
            file_path, line_num, msg_id, message, _symbol = match.groups()
            entry = collected[msg_id]
            entry["message"] = PylintAdapter._strip_ansi(message)
            locations = entry["locations"]
            if isinstance(locations, set):
                locations.add(f"{file_path}:{line_num}")

        results = []
        for msg_id, data in sorted(collected.items()):
            locations = data["locations"]
            results.append(
                LinterResult(
                    msg_id,
                    str(data["message"]),
                    sorted(locations) if isinstance(locations, set) else [],
                )
            )
        return results

    @staticmethod
    def _strip_ansi(text: str) -> str:
        """Remove common ANSI escape sequences from pylint message."""
        return re.sub(r"\033\[[0-9;]*m", "", text).strip()
