"""branchguard — evaluate repository rulesets against branches and commit metadata."""

__version__ = "0.1.0"
