"""Starter .branchguard.toml template."""

DEFAULT_TOML = """\
# branchguard configuration
version = "1.0"

[rules]
file = ".github/rulesets.yaml"   # exported rulesets (YAML or JSON)
# default_branch = "main"        # overrides default_branch from the rules file

[check]
fail_on = "enforced"             # enforced | bypass (also block on bypassable failures)

[output]
format = "terminal"              # terminal | json
show_summary = true
"""
