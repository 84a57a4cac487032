"""Browser orchestration and the DOM-to-fares extraction pipeline."""
