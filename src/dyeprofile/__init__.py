"""DyeProfile — replicate dye-gradient images to channel-ness CSV profiles."""
