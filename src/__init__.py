"""Image Service Package."""

__version__ = "1.0.0"
__author__ = "Bharat kumar"
__description__ = (
    "Serverless image service backed by S3, DynamoDB and an in-process view cache"
)

__all__ = ["handlers", "core"]
