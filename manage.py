#!/usr/bin/env python
"""
Entry point for the MediLink backend.  Sets the default settings module to
``medilink.settings`` and delegates to Django's management command line
utility (``runserver`` listens on ``$PORT``, default 5000).
"""
import os
import sys


def main() -> None:
    """Run administrative tasks for the MediLink backend."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'medilink.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Is it installed and on your PYTHONPATH? "
            "Did you forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
