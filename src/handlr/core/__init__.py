"""
Core building blocks for handlr: configuration, logging, errors, MIME and
path values, desktop entries and the handler base class.

Author: Tim Hosking
Contact: https://github.com/Munger
License: MIT
"""
