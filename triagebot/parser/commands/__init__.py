"""Parsers for the individual bot commands."""