"""Service layer for xenops-cli.

``core`` holds configuration and pure data types, ``rpc`` talks to xenopsd and
``dispatcher`` applies per-command policy.  Nothing in here parses
``sys.argv`` or prints.
"""
