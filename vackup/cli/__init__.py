"""
CLI Module for Vackup

Pure CLI implementation using Typer and Rich.
"""
