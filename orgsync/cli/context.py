from __future__ import annotations

from dataclasses import dataclass

from orgsync.github.http import HttpClient, RealHttpClient
from orgsync.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    http: HttpClient


def build_context() -> CLIContext:
    return CLIContext(console=RichConsole(), http=RealHttpClient())
