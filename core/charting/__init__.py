"""Chart payload builders for the profile dashboard.

Charts in the UI are described by declarative Chart.js payloads built here
from aggregated summaries. The browser script only draws what it is given.
"""
