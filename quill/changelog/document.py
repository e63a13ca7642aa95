"""The CHANGELOG.md file, handled as opaque text."""

from pathlib import Path


class ChangelogDocument:

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return self.path.name

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str | None:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding='utf-8')

    def write(self, content: str) -> None:
        if not content.endswith('\n'):
            content += '\n'
        self.path.write_text(content, encoding='utf-8')
