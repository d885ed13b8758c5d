"""Test suite for editmend.

Test Structure:
- unit/: Unit tests for individual components
  - agents/: Providers, prompts, cancellation, invoker, edit fixer
  - caching/: LRU cache and fingerprints
  - config/: Config models and loaders
  - cli/: Command-line interface
- fixtures/: Prompt packs and fake providers
- conftest.py: Shared fixtures and test configuration
"""
