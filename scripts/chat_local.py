#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local chat harness (no HTTP, no Telegram).

Usage:
  python3 scripts/chat_local.py

What it does:
- Runs typed messages through the same HandleIncomingEventUseCase as the webhook
- Prints every outbound message with numbered buttons
- Type `#<n>` to press button n of the most recent keyboard
"""

import asyncio
import itertools
import os

from dotenv import load_dotenv

from intake.application.use_cases.admission_control import AdmissionControl
from intake.application.use_cases.build_prompt import PromptBuilder
from intake.application.use_cases.handle_incoming_event import HandleIncomingEventUseCase
from intake.application.use_cases.message_ledger import MessageLedger, RetryPolicy
from intake.application.use_cases.workflow import WorkflowStateMachine
from intake.application.ports.message_platform import MessagePlatformPort
from intake.application.utils import action_tokens
from intake.domain.entities.events import FreeText, InboundEvent, StartCommand
from intake.domain.entities.prompt import Action, Prompt
from intake.infrastructure.handoff.logging_handoff import LoggingHandoff
from intake.infrastructure.knowledge.catalog_store import CatalogStore
from intake.infrastructure.store.memory_store import MemoryRateLimitStore, MemorySessionStore


class ConsolePlatform(MessagePlatformPort):
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.last_actions: tuple[Action, ...] = ()

    async def send(self, recipient_id: str, prompt: Prompt) -> str:
        message_id = str(next(self._ids))
        self._print(f"[#{message_id}]", prompt)
        return message_id

    async def edit(self, recipient_id: str, message_id: str, prompt: Prompt) -> None:
        self._print(f"[#{message_id} edited]", prompt)

    async def delete(self, recipient_id: str, message_id: str) -> None:
        print(f"[#{message_id} deleted]")

    def _print(self, header: str, prompt: Prompt) -> None:
        print(f"\n{header}\n{prompt.text}")
        for index, action in enumerate(prompt.actions, 1):
            print(f"  #{index} {action.label}")
        if prompt.link is not None:
            print(f"  -> {prompt.link.label}: {prompt.link.url}")
        if prompt.actions:
            self.last_actions = prompt.actions


def _build_use_case(platform: ConsolePlatform) -> HandleIncomingEventUseCase:
    catalog = CatalogStore()
    sessions = MemorySessionStore()
    prompts = PromptBuilder(catalog)
    ledger = MessageLedger(platform, RetryPolicy(batch_delay_seconds=0.0, backoff_base_seconds=0.0))
    workflow = WorkflowStateMachine(platform, ledger, prompts, catalog, LoggingHandoff())
    admission = AdmissionControl(sessions, MemoryRateLimitStore())
    return HandleIncomingEventUseCase(sessions, admission, ledger, workflow, prompts, platform)


async def main() -> None:
    load_dotenv()
    user_id = os.getenv("CHAT_USER_ID", "local_user_1")
    platform = ConsolePlatform()
    use_case = _build_use_case(platform)
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"user_id: {user_id}")
    print("Commands: /start, #<n> (press button), /quit")
    print("-" * 60)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue
        if user_text.lower() in ("/quit", "/exit"):
            print("Bye!")
            return

        if user_text == "/start":
            event = StartCommand()
        elif user_text.startswith("#") and user_text[1:].isdigit():
            index = int(user_text[1:]) - 1
            if not 0 <= index < len(platform.last_actions):
                print("(no such button)")
                continue
            event = action_tokens.decode(platform.last_actions[index].token)
        else:
            event = FreeText(user_text)

        await use_case.handle(InboundEvent(user_id=user_id, handle="local", event=event))


if __name__ == "__main__":
    asyncio.run(main())
