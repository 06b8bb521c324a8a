"""Text utilities shared by the segmenter and render modules."""
