"""Fuzz testing suite for basso."""

from .fuzz import Fuzzer, FuzzReport, FuzzRunner, random_key, random_number

__all__ = ["Fuzzer", "FuzzReport", "FuzzRunner", "random_key", "random_number"]
