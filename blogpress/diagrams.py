"""Diagram renderers that turn diagram source text into image bytes."""

import asyncio
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from blogpress.exceptions import DiagramRenderError
from blogpress.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DIAGRAM_COMMANDS: dict[str, list[str]] = {
    "mermaid": ["mmdc", "-i", "{input}", "-o", "{output}", "-b", "transparent"],
    "d2": ["d2", "{input}", "{output}"],
}

SOURCE_SUFFIXES = {"mermaid": ".mmd", "d2": ".d2"}


class DiagramRenderer(ABC):
    """Renders the body of a diagram code block to an image."""

    output_suffix = ".svg"

    @abstractmethod
    def supports(self, language: str) -> bool:
        pass

    @abstractmethod
    async def render(self, language: str, source: str) -> bytes:
        pass


class CommandDiagramRenderer(DiagramRenderer):
    """
    Runs an external diagram compiler per block. Each command is an argv
    template with `{input}` and `{output}` placeholders, e.g. the mermaid CLI
    `mmdc -i {input} -o {output}`.

    Every render gets its own temporary directory, so concurrent renders never
    share files and nothing is left behind when the tool fails.

    """

    def __init__(self, commands: dict[str, list[str]] | None = None) -> None:
        self.commands = {
            language.lower(): argv
            for language, argv in (commands or DEFAULT_DIAGRAM_COMMANDS).items()
        }

    def supports(self, language: str) -> bool:
        return language.lower() in self.commands

    async def render(self, language: str, source: str) -> bytes:
        language = language.lower()
        if language not in self.commands:
            raise DiagramRenderError(language, "no renderer configured")

        with tempfile.TemporaryDirectory(prefix="blogpress-") as tmp_dir:
            input_path = Path(tmp_dir) / f"diagram{SOURCE_SUFFIXES.get(language, '.txt')}"
            output_path = Path(tmp_dir) / f"diagram{self.output_suffix}"
            input_path.write_text(source, encoding="utf-8")

            cmd = [
                part.format(input=input_path, output=output_path)
                for part in self.commands[language]
            ]
            logger.debug(f"Rendering {language} diagram: {' '.join(cmd)}")

            try:
                process = await asyncio.create_subprocess_exec(
                    *cmd,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
                stdout, stderr = await process.communicate()
            except FileNotFoundError:
                raise DiagramRenderError(
                    language, f"command not found: {cmd[0]}"
                ) from None

            if process.returncode != 0:
                error_msg = (stderr or stdout or b"").decode(errors="replace").strip()
                raise DiagramRenderError(
                    language,
                    f"exit code {process.returncode}: {error_msg or 'Unknown error'}",
                )

            if not output_path.exists():
                raise DiagramRenderError(language, "renderer produced no image")

            return output_path.read_bytes()


def diagram_file_name(alt: str, index: int, suffix: str) -> str:
    """Upload name for a diagram, derived from its alt text."""
    stem = re.sub(r"[^\w.-]+", "-", alt.strip()).strip("-.")
    return f"{stem or f'diagram-{index}'}{suffix}"
