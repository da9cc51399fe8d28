"""
NPU Creations — Services Layer
================================

Service Inventory:
    - ImageService: base64 decode, S3 upload of image + thumbnail, compensation delete
    - CreationRepository: DynamoDB record writer
    - CreationService: Orchestrates validate → upload → persist → respond
"""
