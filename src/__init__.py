"""Language Page Generator package.

This module is the root of the language page generator, which turns records
of a hierarchical programming-language knowledge base into scroll markup
pages for a static-site compiler.

Package Structure
-----------------
- `pipeline/language_pages/`:
    Record store, table normalization, fact resolvers, section builders,
    page assembly and the batch runner.
- `program1_generate_language_pages.py`: Command line entrypoint.
- `config.py`: All configuration constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import src
>>> # See src/program1_generate_language_pages.py for the CLI entrypoint.
"""
