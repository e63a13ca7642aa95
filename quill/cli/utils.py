"""CLI Utility Functions"""

import os
import subprocess
import sys
import tempfile

# Clipboard commands per platform, tried in order
CLIPBOARD_COMMANDS = {
    'win32': [['clip']],
    'darwin': [['pbcopy']],
    'linux': [['xclip', '-selection', 'clipboard'], ['xsel', '--clipboard', '--input'], ['wl-copy']],
}


def copy_to_clipboard(text: str) -> tuple[bool, str]:
    """Copy text to clipboard. Returns (success, failure_reason)."""
    commands = CLIPBOARD_COMMANDS.get(sys.platform, CLIPBOARD_COMMANDS['linux'])
    for command in commands:
        try:
            subprocess.run(command, input=text.encode('utf-8'), check=True)
            return True, ""
        except FileNotFoundError:
            continue
        except (subprocess.CalledProcessError, OSError) as e:
            return False, f"Clipboard command failed: {e}"

    if sys.platform == 'linux':
        return False, "Install xclip or xsel: sudo apt install xclip"
    return False, "No clipboard tool found"


def edit_text(text: str, suffix: str = '.txt') -> str | None:
    """Open text in the user's editor. Returns edited text, or None if empty or on failure."""
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'

    tmp = tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False, encoding='utf-8')
    try:
        tmp.write(text)
        tmp.close()
        subprocess.run([*editor.split(), tmp.name], check=True)
        with open(tmp.name, 'r', encoding='utf-8') as f:
            edited = f.read().strip()
        return edited if edited else None
    except (subprocess.CalledProcessError, OSError):
        return None
    finally:
        try:
            os.unlink(tmp.name)
        except OSError as e:
            # Log to stderr so temp files don't silently accumulate
            print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)
