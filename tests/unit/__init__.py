"""
tests.unit
==========

Unit tests for the shared core (`smcore`): errors, logging, hashing.
Pallet and runtime tests live next to the code in `statemachine/tests`.
"""
