"""Starter .stagefmt.toml template."""

DEFAULT_TOML = """\
# stagefmt configuration
version = "1.0"

[format]
# Shell command that reads file content on stdin and prints the formatted
# content on stdout. "{}" is replaced with the path of the staged file.
formatter = "prettier --stdin-filepath '{}'"

# Files to format, checked left to right; the last matching pattern wins.
# A leading "!" excludes. Command-line patterns replace this list.
patterns = ["*.js", "*.ts", "!vendor/*"]

update_working_tree = true   # patch working tree files with the same changes
write = true                 # false = only run the formatter (lint mode)
jobs = 1                     # parallel formatter processes, 0 = one per CPU
timeout = 0                  # seconds per file, 0 = no limit

[output]
format = "terminal"          # terminal | json
show_summary = true
"""
