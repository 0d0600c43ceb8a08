from pathlib import Path


class MarkdownLoader:

    EXTENSIONS = {".md", ".markdown", ".txt"}

    def supports(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONS

    def load(self, file_path: Path) -> str:
        # utf-8-sig drops a BOM that would otherwise hide the first heading
        text = file_path.read_text(encoding="utf-8-sig")
        return text.replace("\r\n", "\n")
