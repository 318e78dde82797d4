#!/usr/bin/env python3
"""
Abbreviator CLI Interface
Command-line interface for listing abbreviations and rewriting HTML files
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import AbbreviatorConfig, default_config
from .core.exceptions import AbbreviatorError
from .core.registry import AbbreviationRegistry, load_registry
from .core.rewriter import ContentRewriter, RewriteDecision, brackets_balanced

console = Console()


class AbbreviatorCLI:
    """Command-line interface for the abbreviator"""

    def __init__(self, config: Optional[AbbreviatorConfig] = None):
        self.config = config or default_config
        self.registry = AbbreviationRegistry()
        self.rewriter = ContentRewriter(self.registry)

    def load_abbreviations(self, path: Optional[str] = None) -> AbbreviationRegistry:
        """Load the abbreviation file and prepare a rewriter for it"""
        self.registry = load_registry(path or self.config.abbreviations_file)
        self.rewriter = ContentRewriter(self.registry)
        return self.registry

    def show_abbreviations(self):
        """Print the loaded abbreviations as a table"""
        if not len(self.registry):
            console.print("No abbreviations defined", style="yellow")
            return

        table = Table(title=f"Abbreviations ({len(self.registry)})")
        table.add_column("Abbreviation", style="cyan", no_wrap=True)
        table.add_column("Meaning")

        for entry in self.registry:
            table.add_row(entry.abbreviation, entry.meaning)

        console.print(table)

    def check_file(self, file_path: str) -> RewriteDecision:
        """Print how a content file would be rewritten"""
        content = Path(file_path).read_text(encoding="utf-8")
        decision = self.rewriter.check(content)

        table = Table(title=Path(file_path).name, show_header=False)
        table.add_column("Check", style="cyan")
        table.add_column("Result")
        table.add_row("Has abbreviations", self._yes_no(decision.has_abbreviations))
        table.add_row("Abbreviations inside tags", self._yes_no(decision.has_abbreviations_inside_tags))
        table.add_row("Tag brackets balanced", self._yes_no(brackets_balanced(content)))
        console.print(table)

        return decision

    def rewrite_file(self, file_path: str, output_path: Optional[str] = None) -> str:
        """Rewrite a content file, writing to output_path or stdout"""
        content = Path(file_path).read_text(encoding="utf-8")
        rewritten = self.rewriter.rewrite(content)

        if output_path:
            Path(output_path).write_text(rewritten, encoding="utf-8")
            console.print(f"✅ Wrote {output_path}", style="green")
        else:
            sys.stdout.write(rewritten)

        return rewritten

    @staticmethod
    def _yes_no(value: bool) -> str:
        return "[green]yes[/green]" if value else "[dim]no[/dim]"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Abbreviator - wrap abbreviations in HTML content with <abbr> tags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List the configured abbreviations
  abbreviator --abbreviations abbreviations.yaml --list

  # Show whether a page needs rewriting
  abbreviator -a abbreviations.yaml --check page.html

  # Rewrite a page
  abbreviator -a abbreviations.yaml --rewrite page.html -o page.abbr.html
        """
    )

    parser.add_argument(
        "--abbreviations", "-a",
        help="YAML file of abbreviations and meanings (default: from config)"
    )

    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="List abbreviations"
    )

    parser.add_argument(
        "--check", "-c",
        metavar="FILE",
        help="Report whether FILE contains abbreviations"
    )

    parser.add_argument(
        "--rewrite", "-r",
        metavar="FILE",
        help="Add <abbr> tags to FILE"
    )

    parser.add_argument(
        "--output", "-o",
        help="Where to write rewritten content (default: stdout)"
    )

    parser.add_argument(
        "--config",
        help="YAML configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    try:
        config = AbbreviatorConfig.load_from_file(args.config) if args.config else default_config
    except ValueError as e:
        console.print(f"❌ {e}", style="red")
        return 1

    if args.debug:
        config.debug = True
        config.log_level = "DEBUG"

    logging.basicConfig(level=getattr(logging, str(config.log_level).upper(), logging.INFO))

    cli = AbbreviatorCLI(config)

    try:
        cli.load_abbreviations(args.abbreviations)
    except (AbbreviatorError, OSError, yaml.YAMLError) as e:
        console.print(f"❌ Could not load abbreviations: {e}", style="red")
        return 1

    if not any([args.list, args.check, args.rewrite]):
        console.print(Panel(
            f"{len(cli.registry)} abbreviations loaded from {args.abbreviations or config.abbreviations_file}\n"
            "Use --list, --check FILE or --rewrite FILE",
            title="Abbreviator",
            style="bold magenta"
        ))
        return 0

    try:
        if args.list:
            cli.show_abbreviations()

        if args.check:
            cli.check_file(args.check)

        if args.rewrite:
            cli.rewrite_file(args.rewrite, args.output)

    except OSError as e:
        console.print(f"❌ {e}", style="red")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
