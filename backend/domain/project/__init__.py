"""
Project Domain - Projects and their tasks.

This domain handles the tracked units of work:
- Projects with deadlines, functional-area tags and task lists
- Tasks with a todo / ongoing / done status
- Mapping loosely-typed stored documents into well-formed projects
- The document store interface projects are persisted through
"""
