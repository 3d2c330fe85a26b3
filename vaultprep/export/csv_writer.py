"""
VAULTPREP CSV File Writer

Writes serialized relations to ``{name}.csv`` files in an output directory.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from ..core.config import Config
from ..core.logger import Logger


class CSVFileWriter:
    """Writes relation CSV text to disk."""

    def __init__(self, output_dir: Optional[Union[str, Path]] = None, config: Optional[Config] = None):
        """Initialize the writer.

        Args:
            output_dir: Target directory. Defaults to ``export.output_dir``.
            config: Optional Config instance
        """
        self.config = config or Config()
        self.output_dir = Path(output_dir or self.config.get("export.output_dir", "export"))
        self.logger = Logger("csv_writer", config=self.config)

    def write(self, name: str, content: str) -> Path:
        """
        Write one relation.

        Args:
            name (str): File stem, e.g. ``standard_hub``
            content (str): Serialized CSV text

        Returns:
            Path: Path of the written file

        Raises:
            ValueError: If the name would leave the output directory
            OSError: If the directory or file cannot be written
        """
        if not name or Path(name).name != name or name in (".", ".."):
            raise ValueError(f"Invalid export file name: {name!r}")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{name}.csv"
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        self.logger.info(f"Wrote {path}", path=str(path))
        return path

    def write_all(self, exports: Dict[str, str]) -> List[Path]:
        """Write every relation, in the given order."""
        return [self.write(name, content) for name, content in exports.items()]
