"""Setup instructions shown when no repository is configured."""

SETUP_INSTRUCTION_PROMPT = """
Goal: Help other projects consume this repo. Focus on public API, install, and examples, not full code browsing.

Create repo-reader.config.json at repository root with:
- name: Repository name (used for the tool names)
- files: Glob patterns that surface consumer-facing docs and public exports
- depth: Optional default menu depth (-1 for unlimited)

Recommended minimal config
```json
{
  "name": "my-repo",
  "files": [
    "README.md",
    "docs/**/*.md",
    "docs/**/*.mdx",
    "src/**/*.py",
    "src/**/*.ts"
  ]
}
```

What to include (prioritize consumer value)
- Getting started and install: README.md, docs/getting-started.md, docs/installation.md
- Usage and examples: docs/usage/**/*, examples/**/*, docs/**/*.md
- Public API surface: package entry points, __init__.py / index files, modules exporting functions, classes and constants
- Integration references: configuration snippets that are part of public usage

What to avoid
- Internal implementation details that do not affect how consumers use the API
- Generated or build outputs: node_modules/**, dist/**, build/**, .venv/**, coverage/**, vendor/**
- Large media or datasets

Glob syntax
- Use forward slashes. `*` stays within one directory, `**` crosses directories, `?` is one character.
- Brace expansion (e.g. {md,mdx}) and character classes are not supported; list each pattern separately.
""".strip()
