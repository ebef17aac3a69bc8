"""Tokenizing, ignored Markdown regions, command parsing and mention detection for comments."""