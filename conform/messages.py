from termcolor import colored

###############################################################################
# Output markers
###############################################################################

# Marker text without colour codes, used to indent continuation lines
_RAW = {
    "pass": "[✓]",
    "fail": "[✗]",
    "warn": "[?]",
    "info": "[i]",
}

_COLOURS = {
    "pass": "green",
    "fail": "red",
    "warn": "yellow",
    "info": "blue",
}


def _marker(kind: str) -> str:
    return '[' + colored(_RAW[kind][1], _COLOURS[kind]) + ']'


def _emit(kind: str, *args) -> None:
    lines = '\n'.join(str(arg) for arg in args).split('\n')
    print(f"{_marker(kind)} {lines[0]}")
    padding = ' ' * len(_RAW[kind])
    for line in lines[1:]:
        print(f"{padding} {line}")


def error(*msg): _emit("fail", *msg)

def warning(*msg): _emit("warn", *msg)

def info(*msg): _emit("info", *msg)

def success(*msg): _emit("pass", *msg)


def detail(*msg, depth: int = 1) -> None:
    """
    Prints lines nested under the previous message, e.g. the violations of a
    failed check.
    """
    indent = ' ' * (len(_RAW["fail"]) + 1) * depth
    for line in '\n'.join(str(arg) for arg in msg).split('\n'):
        print(f"{indent}{line}")
