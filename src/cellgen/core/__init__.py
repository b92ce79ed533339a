"""Automaton core: transition rules and generation-by-generation evolution."""
