#!/usr/bin/env python3
"""
Sudoku Booklet Maker

Generates printable A4 booklets of Sudoku puzzles: a cover page, one large
print puzzle per page and an optional solutions section.
Supports reproducible booklets from a seed, three difficulty levels and
pre-made 4x4, 6x6 or 9x9 puzzles loaded from a JSON file.
"""

import argparse
import sys
from pathlib import Path

from sudoku_booklet.config import MAX_COUNT, MIN_COUNT
from sudoku_booklet.models import Difficulty
from sudoku_booklet.services import BookletService, ConfigService

DIFFICULTIES = [d.value for d in Difficulty]


def interactive_mode(defaults) -> dict:
    """
    Gather options interactively from user input.

    Args:
        defaults: UserDefaults loaded from config.json

    Returns:
        Dictionary of options
    """
    print("\n=== Sudoku Booklet Maker ===\n")

    size_input = input("Board size [9]: ").strip()
    try:
        size = int(size_input) if size_input else 9
    except ValueError:
        size = 9

    count_input = input(f"Number of puzzles ({MIN_COUNT}-{MAX_COUNT}) [{defaults.count}]: ").strip()
    try:
        count = int(count_input) if count_input else defaults.count
    except ValueError:
        count = defaults.count

    print("\nDifficulty:")
    for i, name in enumerate(DIFFICULTIES, start=1):
        print(f"  {i}. {name.capitalize()}")
    default_choice = DIFFICULTIES.index(defaults.difficulty) + 1
    choice = input(f"Choose [{default_choice}]: ").strip()
    if choice in ('1', '2', '3'):
        difficulty = DIFFICULTIES[int(choice) - 1]
    else:
        difficulty = defaults.difficulty

    seed = input("\nSeed (empty for random): ").strip()

    solutions_default = "Y/n" if defaults.include_solutions else "y/N"
    solutions_choice = input(f"Include solutions? [{solutions_default}]: ").strip().lower()
    if solutions_choice in ('y', 'yes'):
        include_solutions = True
    elif solutions_choice in ('n', 'no'):
        include_solutions = False
    else:
        include_solutions = defaults.include_solutions

    return {
        'size': size,
        'count': count,
        'difficulty': difficulty,
        'seed': seed,
        'include_solutions': include_solutions
    }


def wants_interactive(args) -> bool:
    """
    Decide whether to prompt for options.

    Prompting only happens with --interactive, or when no generation option
    was given on the command line at all.
    """
    if args.interactive:
        return True
    generation_flags = (
        args.count is not None,
        args.difficulty is not None,
        bool(args.seed),
        args.size is not None,
        args.no_solutions,
    )
    return not any(generation_flags)


def options_from_args(args, defaults) -> dict:
    """Build generation options from command-line arguments, falling back to saved defaults."""
    return {
        'size': args.size if args.size is not None else 9,
        'count': args.count if args.count is not None else defaults.count,
        'difficulty': args.difficulty or defaults.difficulty,
        'seed': args.seed or '',
        'include_solutions': defaults.include_solutions and not args.no_solutions
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate printable Sudoku booklets (A4 PDF) with an optional solutions section.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                          # Interactive mode
  %(prog)s --count 12 --difficulty medium
  %(prog)s --count 6 --seed garden-club --no-solutions
  %(prog)s --items puzzles_6x6.json                 # Pre-made 4x4, 6x6 or 9x9 puzzles
  %(prog)s --count 10 --output-dir prints --output-name weekly
        """
    )

    parser.add_argument('--count', type=int, help=f'Number of puzzles ({MIN_COUNT}-{MAX_COUNT})')
    parser.add_argument('--difficulty', choices=DIFFICULTIES, help='Puzzle difficulty')
    parser.add_argument('--seed', default='', help='Seed for a reproducible booklet')
    parser.add_argument('--size', type=int, help='Board size (generated puzzles are always 9x9)')
    parser.add_argument('--no-solutions', action='store_true', help='Leave out the solutions section')
    parser.add_argument('--items', help='JSON file with pre-made puzzles to render instead of generating')
    parser.add_argument('--title', help='Cover title')
    parser.add_argument('--output-name', help='Output file name (without .pdf)')
    parser.add_argument('--output-dir', help='Output directory')
    parser.add_argument('--generator', help="Puzzle source as 'module:function'")
    parser.add_argument('--config', help='Path to config.json with saved defaults')
    parser.add_argument('--save-defaults', action='store_true',
                        help='Remember count, difficulty, solutions and output directory for next time')
    parser.add_argument('--interactive', '-i', action='store_true',
                        help='Force interactive mode')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config_service = ConfigService(Path(args.config) if args.config else None)
    defaults = config_service.load()

    service = BookletService(generator_reference=args.generator or defaults.generator)
    output_folder = args.output_dir or defaults.output_folder
    captions = {
        'title': args.title or defaults.title or None,
        'puzzle_footer': defaults.puzzle_footer,
        'solution_footer': defaults.solution_footer
    }

    try:
        if args.items:
            print(f"Input puzzles: {args.items}")
            options = {'include_solutions': defaults.include_solutions and not args.no_solutions}
            result = service.render_items_file(
                Path(args.items),
                output_name=args.output_name,
                output_folder=output_folder,
                **options,
                **captions
            )
        else:
            if wants_interactive(args):
                options = interactive_mode(defaults)
            else:
                options = options_from_args(args, defaults)

            print(f"\nGenerating {options['count']} {options['difficulty']} puzzle(s)...")
            result = service.generate_booklet(
                output_name=args.output_name,
                output_folder=output_folder,
                **options,
                **captions
            )

        if args.save_defaults:
            if not args.items:
                defaults.count = len(result.items)
                defaults.difficulty = options['difficulty']
            defaults.include_solutions = options['include_solutions']
            defaults.output_folder = output_folder
            config_service.save(defaults)

        for warning in result.warnings:
            print(f"Warning: {warning}")

        print(f"  Created: {result.output_path.name}")
        if result.seed:
            print(f"  Seed: {result.seed}")
        print(f"\nBooklet generation complete!")
        print(f"Pages: {result.page_count}")
        print(f"Output file: {result.output_path}")

    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
