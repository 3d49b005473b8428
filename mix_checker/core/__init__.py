"""mix_checker.core — Foundation layer.

Contains the colour types, mixing maths, palette, recipe parser, env loading
and report builder. This module has NO dependencies on mix_checker.commands
or mix_checker.registry. Only stdlib and numpy are allowed here.
"""
