"""
Chip Settle - Source Package

Settles up a poker night: who pays whom, and how much, so that
everyone walks away even.

DESIGN PRINCIPLES:
1. Money is Decimal, rounded only for display
2. Fail early, fail visibly (no silently dropped rows)
3. No silent corrections (an unbalanced table is reported, not fixed)
4. Same roster in, same transfers out
5. Every calculation is auditable
"""

__version__ = "1.0.0"
__author__ = "Chip Settle Team"
