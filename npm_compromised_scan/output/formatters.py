"""Output formatters for scan results."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from ..core.matcher import MatchRecord, MatchType, ScanResult
from ..utils.logging import get_logger

NO_MATCHES_MESSAGE = "No compromised dependencies found."

MATCH_LABELS = {
    MatchType.EXACT: "[EXACT MATCH]",
    MatchType.NAME: "[NAME MATCH ]",
}


def _print_plain(console: Console, text: str) -> None:
    # Labels like "[EXACT MATCH]" would otherwise be read as rich markup
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


class TextFormatter:
    """Line oriented formatter, one line per match."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the text formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_match(self, match: MatchRecord) -> str:
        return f"{MATCH_LABELS[match.match_type]} {match.name}@{match.version}"

    def format_lines(self, result: ScanResult) -> List[str]:
        """Format scan results as report lines.

        Args:
            result: Scan result

        Returns:
            Report lines
        """
        if not result.any_match:
            return [NO_MATCHES_MESSAGE]
        return [self.format_match(match) for match in result.matches]

    def render(self, result: ScanResult) -> None:
        for line in self.format_lines(result):
            _print_plain(self.console, line)


class JSONFormatter:
    """JSON formatter for scan results."""

    def __init__(self, console: Optional[Console] = None, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            console: Rich console instance
            output_file: Optional output file path
        """
        self.console = console or Console()
        self.output_file = output_file
        self.logger = get_logger("JSONFormatter")

    def format_scan_results(self, result: ScanResult) -> Dict[str, Any]:
        """Format scan results as a JSON serializable dict.

        Args:
            result: Scan result

        Returns:
            Formatted JSON data
        """
        return {
            "matches": [match.to_dict() for match in result.matches],
            "match_count": result.match_count,
            "compromised_names": result.lists.sorted_names(),
            "compromised_exact": result.lists.sorted_exact(),
        }

    def dumps(self, result: ScanResult) -> str:
        return json.dumps(self.format_scan_results(result), indent=2, ensure_ascii=False)

    def render(self, result: ScanResult) -> None:
        _print_plain(self.console, self.dumps(result))

    def save_results(self, result: ScanResult, output_file: Optional[Path] = None) -> None:
        """Save results to a JSON file.

        Args:
            result: Scan result
            output_file: Output file path (uses instance default if None)
        """
        file_path = output_file or self.output_file
        if not file_path:
            raise ValueError("No output file specified")

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(self.dumps(result))
                f.write("\n")
        except OSError as e:
            self.logger.error(f"Failed to save results to {file_path}: {e}")
            raise

        self.logger.info(f"Results saved to {file_path}")
