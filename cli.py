"""
Command-Line Interface for the CSV Structure Profiler

Provides commands for:
- analyze: Profile the structure and field types of delimited files
- classify: Classify individual values
- config: Manage configurations
"""

import argparse
import sys
import logging
from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from csvprofile.config import Config, ConfigLoader, ConfigValidator, get_default_config, unescape_delimiter
from csvprofile.errors import ProfilerError, ReaderError
from csvprofile.inference import classify_value
from csvprofile.report import FileReport, json_safe, render_report, reports_to_frame
from csvprofile.scanner import FileScanner
from csvprofile.utils import FileHandler, setup_logging, write_table

# Setup console
console = Console()

logger = logging.getLogger("csvprofile.cli")


class CLI:
    """Main CLI class"""

    def __init__(self, config_loader: Optional[ConfigLoader] = None):
        self.parser = self._create_parser()
        self.config_loader = config_loader or ConfigLoader()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description="CSV Structure Profiler CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Profile a file
  python cli.py analyze data.csv

  # Tab separated input, report written to YAML
  python cli.py analyze export.tsv --preset tsv --output report.yaml

  # Profile several files and write a summary table
  python cli.py analyze a.csv b.csv --summary summary.csv

  # Classify values
  python cli.py classify 42 3.5 true "[1,2]"
            """
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose output'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Analyze command
        analyze_parser = subparsers.add_parser('analyze', help='Profile delimited files')
        analyze_parser.add_argument('inputs', nargs='+', help='Input files')
        analyze_parser.add_argument('--preset', '-p', help='Configuration preset')
        analyze_parser.add_argument('--config', '-c', help='Custom configuration file')
        analyze_parser.add_argument('--delimiter', '-d', help='Field delimiter (use "\\t" for tabs)')
        analyze_parser.add_argument('--window', '-w', type=int, help='Rows inspected for header detection')
        analyze_parser.add_argument('--output', '-o', help='Output report file (JSON or YAML)')
        analyze_parser.add_argument('--summary', '-s', help='Summary table file (CSV, JSON or Parquet)')
        analyze_parser.add_argument('--no-details', action='store_true', help='Omit per-field type details')

        # Classify command
        classify_parser = subparsers.add_parser('classify', help='Classify individual values')
        classify_parser.add_argument('values', nargs='+', help='Raw values')

        # Config command
        config_parser = subparsers.add_parser('config', help='Manage configurations')
        config_subparsers = config_parser.add_subparsers(dest='config_command')

        config_subparsers.add_parser('list', help='List available presets')

        show_parser = config_subparsers.add_parser('show', help='Show preset configuration')
        show_parser.add_argument('preset', help='Preset name')

        create_parser = config_subparsers.add_parser('create', help='Create custom configuration')
        create_parser.add_argument('output', help='Output configuration file')

        return parser

    def run(self, args=None):
        """Run CLI"""
        args = self.parser.parse_args(args)

        log_level = logging.DEBUG if args.verbose else logging.INFO
        setup_logging(level=log_level)

        if args.command == 'analyze':
            self.cmd_analyze(args)
        elif args.command == 'classify':
            self.cmd_classify(args)
        elif args.command == 'config':
            self.cmd_config(args)
        else:
            self.parser.print_help()

    def _resolve_config(self, args) -> Config:
        """Load configuration and apply command-line overrides"""
        if args.config:
            config = self.config_loader.load_from_file(args.config)
            console.print(f"✓ Loaded custom configuration: {args.config}")
        elif args.preset:
            config = self.config_loader.load_preset(args.preset)
            console.print(f"✓ Loaded preset: {args.preset}")
        else:
            config = get_default_config()

        if args.delimiter:
            config.scan.delimiter = unescape_delimiter(args.delimiter)
        if args.window is not None:
            config.scan.header_window = args.window
        if args.no_details:
            config.output.include_details = False

        is_valid, errors = ConfigValidator.validate(config)
        if not is_valid:
            raise ProfilerError("Invalid configuration: " + "; ".join(errors))

        if not args.verbose:
            setup_logging(level=config.logging.level, log_file=config.logging.log_file)

        return config

    def cmd_analyze(self, args):
        """Profile delimited files"""
        console.print(Panel.fit(
            "🔍 [bold]Structure Analysis[/bold]",
            border_style="cyan"
        ))

        try:
            config = self._resolve_config(args)
            scanner = FileScanner(config.scan)

            reports: List[FileReport] = []
            for input_path in args.inputs:
                info = FileHandler.get_file_info(input_path)
                if not info['exists']:
                    raise ProfilerError(f"File not found: {input_path}")

                report = scanner.scan_file(input_path)
                reports.append(report)

                document = json_safe(report.to_dict(include_details=config.output.include_details))
                console.print(f"\n[bold]File Details:[/bold] {input_path} ({info['size_mb']:.2f} MB)")
                if config.output.format == 'json':
                    console.print_json(render_report(document, 'json', config.output.indent))
                else:
                    console.print(render_report(document, 'yaml'), markup=False)

                self._print_report_tables(report, config.output.include_details)
                console.print(f"Time in Seconds: {report.elapsed_seconds}")

            if args.output:
                documents = [
                    json_safe(r.to_dict(include_details=config.output.include_details))
                    for r in reports
                ]
                FileHandler.write_document(
                    documents[0] if len(documents) == 1 else documents,
                    args.output,
                    indent=config.output.indent,
                )
                console.print(f"\n✓ Report saved to: {args.output}")

            if args.summary:
                write_table(reports_to_frame(reports), args.summary)
                console.print(f"✓ Summary saved to: {args.summary}")

            console.print("\n[bold green]✓ Analysis complete![/bold green]")

        except ReaderError as e:
            console.print(f"[bold red]✗ Error:[/bold red] {e}")
            if e.raw_line is not None:
                console.print("Broken Row:")
                console.print(e.raw_line, markup=False)
            if args.verbose:
                console.print_exception()
            sys.exit(1)

        except ProfilerError as e:
            console.print(f"[bold red]✗ Error:[/bold red] {e}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def _print_report_tables(self, report: FileReport, include_details: bool):
        """Render rich tables for one report"""
        table = Table(title="Structure Summary", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Rows", f"{report.total_row_count:,}")
        table.add_row("Malformed Rows", f"{report.malformed_row_count:,}")
        table.add_row("Regular", "✓" if report.is_regular else "✗")
        table.add_row("First Row Is Header", "✓" if report.first_row_is_header else "✗")
        console.print(table)

        counts = Table(title="Field Counts", show_header=True)
        counts.add_column("Fields", style="cyan")
        counts.add_column("Rows", style="yellow")
        for field_count, rows in sorted(report.field_counts.items()):
            counts.add_row(str(field_count), f"{rows:,}")
        console.print(counts)

        if include_details:
            details = Table(title="Sample Row Types", show_header=True)
            details.add_column("#", style="cyan")
            details.add_column("Value", style="white")
            details.add_column("Kind", style="yellow")
            details.add_column("Truthy", style="green")
            for index, assertion in enumerate(report.type_details):
                truthy = str(assertion.truthy_value) if assertion.is_truthy else ""
                details.add_row(str(index), str(assertion.value), assertion.kind.value, truthy)
            console.print(details)

    def cmd_classify(self, args):
        """Classify individual values"""
        try:
            table = Table(title="Value Classification", show_header=True)
            table.add_column("Value", style="cyan")
            table.add_column("Kind", style="yellow")
            table.add_column("Converted", style="white")
            table.add_column("Truthy", style="green")
            table.add_column("Array", style="blue")
            table.add_column("Object", style="blue")

            for value in args.values:
                assertion = classify_value(value)
                table.add_row(
                    repr(value),
                    assertion.kind.value,
                    repr(assertion.converted_value),
                    str(assertion.truthy_value) if assertion.is_truthy else "-",
                    "✓" if assertion.is_array else "",
                    "✓" if assertion.is_json else "",
                )

            console.print(table)

        except ProfilerError as e:
            console.print(f"[bold red]✗ Error:[/bold red] {e}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def cmd_config(self, args):
        """Manage configurations"""
        console.print(Panel.fit(
            "⚙️ [bold]Configuration Management[/bold]",
            border_style="magenta"
        ))

        try:
            if args.config_command == 'list':
                presets = self.config_loader.list_presets()

                table = Table(title="Available Presets", show_header=True)
                table.add_column("Preset", style="cyan")
                table.add_column("Description", style="white")

                descriptions = {
                    'default': 'Comma separated, lenient quoting',
                    'tsv': 'Tab separated exports',
                    'strict': 'Fail on stray quotes, keep leading spaces',
                }

                for preset in presets:
                    desc = descriptions.get(preset, 'Custom preset')
                    table.add_row(preset, desc)

                console.print(table)

            elif args.config_command == 'show':
                config = self.config_loader.load_preset(args.preset)

                console.print(f"\n[bold]Preset: {args.preset}[/bold]\n")
                console.print_json(data=config.to_dict())

            elif args.config_command == 'create':
                config = get_default_config()
                self.config_loader.save_config(config, args.output)

                console.print(f"✓ Created configuration file: {args.output}")
                console.print("  Edit this file to customize settings")

            else:
                console.print("Use 'config list', 'config show <preset>', or 'config create <file>'")

        except ProfilerError as e:
            console.print(f"[bold red]✗ Error:[/bold red] {e}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)


def main():
    """CLI entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
