"""Flux Studio: four-up text-to-image generation on top of fal.ai."""
