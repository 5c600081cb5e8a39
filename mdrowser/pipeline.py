# mdrowser/pipeline.py
"""
Pipeline module: runs the external fetcher piped into the HTML-to-markdown
converter and turns the captured output into viewer lines.
"""
from __future__ import annotations

import asyncio
import os
import shutil
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from mdrowser.config import BrowserConfig
from mdrowser.errors import CommandError, ConfigurationError, InvalidURLError, LaunchError
from mdrowser.links import extract_domain
from mdrowser.logger import logger

__all__ = (
    "MarkdownPipeline",
    "check_executables",
    "split_output",
    "finalize_lines",
    "failure_message",
)


def finalize_lines(lines: Iterable[str]) -> List[str]:
    """Drop one trailing empty line; never return an empty list."""
    result = list(lines)
    if result and result[-1] == "":
        result.pop()
    return result or [""]


def split_output(text: str) -> List[str]:
    return finalize_lines(text.split("\n"))


def failure_message(exit_code: int, stderr_lines: Iterable[str]) -> str:
    """Non-empty stderr lines, or a generic message built from the exit code."""
    lines = [line for line in stderr_lines if line != ""]
    if lines:
        return "\n".join(lines)
    return f"Command exited with code {exit_code}"


def check_executables(config: BrowserConfig) -> Dict[str, str]:
    """
    Resolve both external tools on PATH.

    Returns a mapping executable -> resolved path; raises ConfigurationError
    for the first tool that cannot be found.
    """
    resolved: Dict[str, str] = {}
    for command in (config.fetcher, config.converter):
        path = shutil.which(command.executable)
        if path is None:
            raise ConfigurationError(
                f"{command.executable} executable is required to fetch pages"
            )
        resolved[command.executable] = path
    return resolved


def _decode(data: Optional[bytes]) -> str:
    return (data or b"").decode("utf-8", errors="replace")


class MarkdownPipeline:
    """Runs `fetcher URL | converter --domain=DOMAIN` without a shell."""

    def __init__(self, config: BrowserConfig) -> None:
        self.config = config

    def build_commands(self, url: str, domain: str) -> Tuple[List[str], List[str]]:
        fetch_argv = self.config.fetcher.argv(url)
        convert_argv = self.config.converter.argv(f"{self.config.domain_flag}={domain}")
        return fetch_argv, convert_argv

    async def run(self, url: str, domain: Optional[str] = None) -> List[str]:
        """
        Fetch `url` and convert it to markdown.

        Returns the output lines on success. Raises InvalidURLError before
        anything is spawned, LaunchError when a process cannot be started,
        CommandError on a nonzero converter exit. The fetcher's exit code
        only counts with `pipefail` enabled.
        """
        if domain is None:
            domain = extract_domain(url)
        if not domain:
            raise InvalidURLError(url)

        fetch_argv, convert_argv = self.build_commands(url, domain)
        logger.debug("Running %s | %s", fetch_argv, convert_argv)

        fetch, convert = await self._spawn(fetch_argv, convert_argv)
        (stdout, convert_err), (_, fetch_err) = await asyncio.gather(
            convert.communicate(), fetch.communicate()
        )
        fetch_code = fetch.returncode or 0
        convert_code = convert.returncode or 0
        logger.debug("Pipeline finished: fetcher=%s converter=%s", fetch_code, convert_code)

        code = convert_code
        if code == 0 and self.config.pipefail:
            code = fetch_code
        if code != 0:
            stderr_lines = _decode(fetch_err).split("\n") + _decode(convert_err).split("\n")
            raise CommandError(code, failure_message(code, stderr_lines))

        return split_output(_decode(stdout))

    async def _spawn(
        self, fetch_argv: Sequence[str], convert_argv: Sequence[str]
    ) -> Tuple[asyncio.subprocess.Process, asyncio.subprocess.Process]:
        read_fd, write_fd = os.pipe()
        try:
            try:
                fetch = await asyncio.create_subprocess_exec(
                    *fetch_argv,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=write_fd,
                    stderr=asyncio.subprocess.PIPE,
                )
            finally:
                os.close(write_fd)

            try:
                convert = await asyncio.create_subprocess_exec(
                    *convert_argv,
                    stdin=read_fd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError:
                try:
                    fetch.kill()
                except ProcessLookupError:
                    pass
                await fetch.communicate()
                raise
        except OSError as exc:
            raise LaunchError(f"Failed to start command: {exc}") from exc
        finally:
            os.close(read_fd)
        return fetch, convert
