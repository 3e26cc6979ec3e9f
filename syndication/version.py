"""
Library self-identification.

Used as the default feed generator when none has been set.
"""

NAME = "Syndication"
VERSION = "0.1.0"
URI = "https://github.com/euskadi31/Syndication"
