"""Services used by the CLI and the site handlers.

Services hold no front-end state; progress and status are reported through
callbacks supplied by the caller.
"""
