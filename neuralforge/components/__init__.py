"""Components layer - domain logic building blocks.

This layer contains the modules that do the actual work:
- ffmpeg invocation and stderr parsing
- content-addressed record storage
- segment planning, spectrogram decoding, k-means

Components are leaf modules that:
- Do NOT import services, workflows, or interfaces
- ARE imported and used BY workflows and services
- May import from: helpers, other components

Architecture:
- helpers/ = stdlib-only utilities (pure, stateless)
- components/ = domain logic building blocks (this layer)
- workflows/ = orchestration of components
- services/ = config, wiring, entry points
- interfaces/ = CLI presentation
"""
