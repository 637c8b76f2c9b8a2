"""Generate Next.js REST route handlers from a Prisma schema."""

__version__ = "0.1.0"
