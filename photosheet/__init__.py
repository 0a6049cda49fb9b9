"""Print-ready photo sheet compositing (passport, ID document, collage)."""
