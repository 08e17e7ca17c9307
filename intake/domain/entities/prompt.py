from dataclasses import dataclass


@dataclass(frozen=True)
class Action:
    label: str
    token: str


@dataclass(frozen=True)
class LinkAction:
    label: str
    url: str


@dataclass(frozen=True)
class Prompt:
    text: str
    actions: tuple[Action, ...] = ()
    link: LinkAction | None = None
    columns: int = 1  # buttons per row when rendered as a keyboard

    @property
    def is_interactive(self) -> bool:
        return bool(self.actions) or self.link is not None
