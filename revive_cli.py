import os
import sys
from pathlib import Path

from revive.revive_file import load_document, load_functions, format_for_path, read_document_text
from revive.revive_printer import Printer
from revive.revive_runtime import DocumentRunner
from revive.revive_datatypes import DocumentParseError
from revive.revive_serialize import deserialize
from revive.revive_stdlib import standard_functions


def build_functions() -> dict:
    """Standard library plus any modules listed in REVIVE_FUNCTIONS."""
    functions = standard_functions()
    for module_name in filter(None, (m.strip() for m in os.environ.get("REVIVE_FUNCTIONS", "").split(","))):
        functions.update(load_functions(module_name))
    return functions


def run_document_file(document_path: str, data_path: str | None = None) -> int:
    """Revive a document file non-interactively and return an exit status."""
    p = Path(document_path)
    try:
        # Raw text, so the runner picks the traversal mode for the file format
        document = read_document_text(str(p))
        data = load_document(data_path) if data_path else None
    except FileNotFoundError as e:
        print(f"Error: file not found: {e.filename}", file=sys.stderr)
        return 1
    except DocumentParseError as e:
        print(f"ParseError: {e}", file=sys.stderr)
        return 1
    runner = DocumentRunner(build_functions(), fmt=format_for_path(str(p)) or "json")
    result = runner.handle_document(document, data)
    if result.status == 'error':
        print(result.format_error(), file=sys.stderr)
        return 1
    print(Printer().pformat(result.value))
    return 0


def repl() -> None:
    print("revive REPL v0.1")
    print("Type a JSON or YAML document per line, ':data <yaml>' to set data, 'exit' to quit.")

    runner = DocumentRunner(build_functions(), fmt="yaml")
    printer = Printer()
    data = None

    while True:
        try:
            line = input(">> ").strip()
        except EOFError:
            print("\nExiting.")
            break
        if not line:
            continue
        if line == "exit":
            break
        if line.startswith(":data"):
            try:
                data = deserialize(line[len(":data"):].strip(), fmt="yaml")
            except DocumentParseError as e:
                print(f"ParseError: {e}", file=sys.stderr)
            continue

        result = runner.handle_document(line, data)
        if result.status == 'error':
            print(result.format_error(), file=sys.stderr)
            continue
        print(printer.pformat(result.value))


def main(argv=None) -> int:
    """Revive a file when provided, otherwise start the interactive REPL."""
    argv = sys.argv[1:] if argv is None else argv
    if argv and not argv[0].startswith("-"):
        return run_document_file(argv[0], argv[1] if len(argv) > 1 else None)
    repl()
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        print("\nExiting.")
