"""
NPU Creations — Create-Creation Function Package
==================================================

What: AWS Lambda function that stores a user-submitted creation (image + metadata).
Who:  Entry point is `creations.handler.lambda_handler`.

Architecture Note:

    ┌─────────────────────────────────────┐
    │        handler (Lambda/Proxy)       │  ← event parsing, response shaping
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← orchestration, compensation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Creation, request/response
    ├─────────────────────────────────────┤
    │        aws (S3 + DynamoDB clients)  │  ← built once per container
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
