"""LLM agents for edit repair.

Provides:
- Provider abstraction (providers)
- Prompt pack loading and rendering (prompts)
- Composite cancellation (cancellation)
- Search/replace edit correction (edit_fixer)
"""
