"""
Kanon - Rule checks for JavaScript source units.

Provides:
- Tree-sitter based parsing into tokens, comments and expression nodes
- A line budget check that understands comment-only lines (max-lines)
- A rule-definition contract check for exported rule modules
  (internal-no-invalid-meta)
- A small linter host and command line to run them

The name "Kanon" (Greek: κανών) means a measuring rod or rule - the thing
you hold code against to see whether it measures up.
"""

__version__ = "0.1.0"
