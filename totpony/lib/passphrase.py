"""Passphrase providers: zero-argument callables returning the passphrase.

Stores call their provider on every load and save; nothing is cached.
"""
from __future__ import annotations
import os
from typing import Callable
import click
from ..config.settings import PASSPHRASE_ENV

class PassphraseError(Exception): ...

def fixed_passphrase(value: str) -> Callable[[], str]:
	return lambda: value

def env_passphrase(var: str = PASSPHRASE_ENV) -> Callable[[], str]:
	def provider() -> str:
		try:
			return os.environ[var]
		except KeyError:
			raise PassphraseError(f"Passphrase variable {var} is not set") from None
	return provider

def prompt_passphrase(confirm: bool = False) -> str:
	"""Ask on the terminal (hidden input); `confirm` asks twice, as for a new database."""
	return click.prompt('Passphrase', hide_input=True, confirmation_prompt=confirm, default='', show_default=False)
