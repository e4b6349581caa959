"""Template-tiled wall/floor layouts for Sokoban-style puzzle boards."""
