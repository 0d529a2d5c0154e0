"""Application-level anti-patterns."""

from __future__ import annotations

import re

from .base import Category, Rule, Severity
from .registry import RuleRegistry

READABLE_PASSWORDS = Rule(
    rule_id="readable-passwords",
    title="Readable Passwords",
    category=Category.APPLICATION,
    severity=Severity.ERROR,
    pattern=re.compile(
        r"(password\s+varchar)|(password\s+text)|(password\s*=)"
        r"|(pwd\s+varchar)|(pwd\s+text)|(pwd\s*=)"
    ),
    message=(
        "● Do not store readable passwords:\n"
        "It's not secure to store a password in clear text or even to pass it over the\n"
        "network in the clear. If an attacker can read the SQL statement you use to\n"
        "insert a password, they can plainly see the password.\n"
        "Additionally, interpolating the user's input string into the SQL query in plain\n"
        "text exposes it to discovery by an attacker.\n"
        "If you can read passwords, so can a hacker.\n"
        "The solution is to encode the password using a one-way cryptographic hash\n"
        "function. This function transforms the input string into a new string,\n"
        "called the hash, that is unrecognizable.\n"
        "Use a salt to defeat dictionary attacks. Don't put the plain-text password\n"
        "into the SQL query. Instead, compute the hash in your application code,\n"
        "and use only the hash in the SQL query.\n"
    ),
)


# Register all rules
_registry = RuleRegistry.get_instance()
_registry.register(READABLE_PASSWORDS)
