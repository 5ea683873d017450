#!/usr/bin/env python3
"""Command-line interface for the combination lock."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import CombinationLockParams, load_params, load_state, save_state
from .controller import BUTTON_CHECK, BUTTON_SHOW_SOLUTION, BUTTON_RETRY, ViewState
from .widget import CombinationLock

# Text commands for the control buttons
COMMAND_BUTTONS = {
    'check': BUTTON_CHECK,
    'solution': BUTTON_SHOW_SOLUTION,
    'retry': BUTTON_RETRY,
}

HELP_TEXT = """Commands:
  up / down          turn the focused segment
  left / right       move focus to the neighbouring segment
  home / end         focus the first / last segment
  check              check the combination (manual mode)
  solution           show the solution
  retry              start over
  state              print the current state as JSON
  quit               leave (saves state if --state was given)
Several commands can be given on one line, separated by spaces."""


def read_params(path):
    """Read task parameters, or defaults when no file is given."""
    if path is None:
        return CombinationLockParams.from_dict({})
    return load_params(path)


def render_lock(task: CombinationLock) -> str:
    """Render the lock as text, marking the focused segment."""
    cells = []
    for segment in task.lock.segments:
        symbol = segment.get_response()
        if segment.is_active:
            cells.append(f"[>{symbol}<]")
        else:
            cells.append(f"[ {symbol} ]")

    lines = [' '.join(cells)]
    if task.lock.get_message():
        lines.append(task.lock.get_message())

    controls = [name for name, button_id in COMMAND_BUTTONS.items()
                if task.controller.buttons.get(button_id)]
    state = task.controller.view_state.name.lower()
    lines.append(f"({state}) controls: {', '.join(controls) or 'none'}")
    return '\n'.join(lines)


def execute_command(task: CombinationLock, command: str) -> bool:
    """Run one text command. Returns False when the session should end."""
    command = command.strip().lower()
    if not command:
        return True

    if command in ('quit', 'q', 'exit'):
        return False

    if command in ('help', '?'):
        print(HELP_TEXT)
    elif command == 'state':
        print(json.dumps(task.get_current_state(), indent=2, ensure_ascii=False))
    elif command in COMMAND_BUTTONS:
        if not task.press_button(COMMAND_BUTTONS[command]):
            print(f"'{command}' is not available right now")
    elif not task.press_key(command):
        print(f"Unknown command: {command} (type 'help')")
    return True


def cmd_info(args):
    """Show sanitized task parameters."""
    try:
        params = read_params(args.file)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading config: {e}", file=sys.stderr)
        return 1

    behaviour = params.behaviour
    max_attempts = behaviour.effective_max_attempts

    print(f"Title: {params.title}")
    print(f"Solution: {params.solution_text} ({len(params.solution)} segments)")
    print(f"Alphabet: {''.join(params.alphabet)} ({len(params.alphabet)} symbols)")
    print()
    print("Behaviour:")
    print(f"  Mode: {'auto-check' if behaviour.auto_check else 'manual check'}")
    print(f"  Max attempts: {max_attempts if max_attempts is not None else 'unlimited'}")
    print(f"  Retry: {'yes' if behaviour.enable_retry else 'no'}")
    print(f"  Solutions button: {'yes' if behaviour.enable_solutions_button else 'no'}")
    return 0


def cmd_play(args):
    """Play the lock in the terminal."""
    try:
        params = read_params(args.file)
        previous_state = load_state(args.state) if args.state else None
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    task = CombinationLock(params, previous_state)
    print(f"{task.get_title()} - type 'help' for commands")

    while True:
        print()
        print(render_lock(task))
        try:
            line = input('> ')
        except EOFError:
            break

        if not all(execute_command(task, command) for command in line.split()):
            break

    if args.state:
        save_state(args.state, task.get_current_state())
        print(f"State saved to {args.state}")

    if task.controller.view_state is ViewState.RESULTS:
        print(f"Score: {task.get_score()}/{task.get_max_score()}")
    return 0


def cmd_gui(args):
    """Launch the Kivy app."""
    from .gui.app import main as gui_main
    gui_main(config_path=args.file, state_path=args.state)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description='Combination lock puzzle',
        prog='combination-lock'
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # info command
    info_parser = subparsers.add_parser('info', help='Show task parameters')
    info_parser.add_argument('file', type=Path, nargs='?',
                             help='Task parameters (JSON)')

    # play command
    play_parser = subparsers.add_parser('play', help='Play in the terminal')
    play_parser.add_argument('file', type=Path, nargs='?',
                             help='Task parameters (JSON, default: built-in task)')
    play_parser.add_argument('-s', '--state', type=Path,
                             help='State file to resume from and save to')

    # gui command
    gui_parser = subparsers.add_parser('gui', help='Open the Kivy app')
    gui_parser.add_argument('file', type=Path, nargs='?',
                            help='Task parameters (JSON)')
    gui_parser.add_argument('-s', '--state', type=Path,
                            help='State file to resume from and save to')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == 'info':
        return cmd_info(args)
    elif args.command == 'play':
        return cmd_play(args)
    elif args.command == 'gui':
        return cmd_gui(args)

    return 0


if __name__ == '__main__':
    sys.exit(main() or 0)
