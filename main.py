"""
Vehicle Marketplace entry point

Runs the marketplace command-line views against a Supabase project.

Examples:
    python main.py browse --engine Electric --price 30000 40000
    python main.py post --name "Tesla Model 3" --price 35000 ... --image car.jpg
    python main.py admin --delete-listing <id>

Environment variables required:
- SUPABASE_URL
- SUPABASE_KEY
"""

import sys

from marketplace.app import run

if __name__ == "__main__":
    sys.exit(run())
