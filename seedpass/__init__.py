"""SeedPass: password strength/breach checks and seeded, breach-avoiding suggestions."""

__version__ = "0.1.0"
