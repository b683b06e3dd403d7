"""Browser remote for vizmote.

A FastAPI application exposing the pairing steps and the command
vocabulary as one HTTP endpoint each, plus a single-page remote.
"""
