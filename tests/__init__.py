"""
Test Suite for LINE Training.

This package contains tests for all modules:
- test_data.py: Vertex indexing, graph loading and reconstruction
- test_sampling.py: Alias edge sampling and negative sampling
- test_model.py: Sigmoid lookup and embedding storage
- test_training.py: Settings, worker loop and learning-rate decay
- test_utils.py: Embedding results, file I/O and post-processing
- test_integration.py: End-to-end runs and command line scripts
"""
