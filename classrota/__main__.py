"""
Entry point for running classrota as a module.

Usage:
    python -m classrota build dataset.json --catalog catalog.json -o schedule.json
    python -m classrota validate dataset.json --catalog catalog.json
    python -m classrota next schedule.json
    python -m classrota show schedule.json --teacher "Ann Lee"
"""

from classrota.cli import main

if __name__ == "__main__":
    main()
