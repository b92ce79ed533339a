"""Renderers consuming finished rows and grids: animated GIF and ANSI terminal."""
