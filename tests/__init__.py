"""
Test Suite for the Route Scanner
================================

Test Structure:
    - test_normalizer.py: Path normalizer properties and conversions
    - test_detector.py: Framework priority table and static fallback
    - test_adapters.py: Per-framework extractors and adapters
    - test_classifier.py: Bucket rules and auth expectations
    - test_inference.py: Login and base URL inference
    - test_scanner.py: End-to-end scans over test_samples/ and generated projects
    - test_config.py / test_report.py: Configuration loading and rendering
"""
