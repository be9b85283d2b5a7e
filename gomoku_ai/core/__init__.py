"""Core infrastructure shared by the board model and the AI players."""
