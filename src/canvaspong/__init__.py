"""Two-paddle ball game with a predictive AI opponent."""
