"""
statemachine.cli — command-line entry points.

- run_blocks : execute a YAML/JSON scenario (or the built-in demo) and print the state
"""
