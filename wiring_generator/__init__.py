"""
DI Wiring Generator

Infers packages in a layered Kotlin project and keeps its Hilt / Koin
dependency-injection modules in sync without losing hand-written code.
"""

__version__ = "0.1.0"

from wiring_generator.core.wiring import WiringGenerator, run_batch
from wiring_generator.cli.commands import main

__all__ = [
    "WiringGenerator",
    "main",
    "run_batch",
]
