"""bfi: an interpreter for the eight-instruction tape language."""
