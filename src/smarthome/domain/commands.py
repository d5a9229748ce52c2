from dataclasses import dataclass
from enum import Enum


class CommandVerb(Enum):
    LOGIN = "LOGIN"
    LIST = "LIST"
    TOGGLE = "TOGGLE"
    EXIT = "EXIT"
    UNKNOWN = "UNKNOWN"


KNOWN_VERBS = {verb.value: verb for verb in CommandVerb if verb is not CommandVerb.UNKNOWN}


@dataclass(frozen=True)
class Command:
    verb: CommandVerb
    args: tuple[str, ...] = ()
    raw_verb: str = ""


def parse_command(line: str) -> Command:
    parts = line.split()
    if not parts:
        return Command(verb=CommandVerb.UNKNOWN)

    raw_verb = parts[0].upper()
    verb = KNOWN_VERBS.get(raw_verb, CommandVerb.UNKNOWN)
    return Command(verb=verb, args=tuple(parts[1:]), raw_verb=raw_verb)
