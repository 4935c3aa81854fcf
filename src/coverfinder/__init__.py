# ABOUTME: Coverfinder locates album artwork for audio files via the Spotify catalog.
# ABOUTME: Reads local tags, picks the best-matching search result, and saves its cover.
