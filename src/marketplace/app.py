"""
Vehicle Marketplace command-line runner

Wires the Supabase connection, repository, uploader and controllers together
and exposes the three views of the marketplace:

1. browse - list listings matching filters
2. post   - create a listing, uploading its images first
3. admin  - show listings and users, delete records (admins only)

Environment variables required:
- SUPABASE_URL
- SUPABASE_KEY (or SUPABASE_SERVICE_KEY)
"""

import argparse
import asyncio
import logging
import traceback
from typing import List, Optional

from . import config
from .browse import BrowseController, BrowseStatus
from .dashboard import DashboardController, DashboardStatus
from .db import DatabaseManager
from .errors import MarketplaceError
from .form_controller import ListingFormController
from .image_uploader import ImageFile, ImageUploader
from .models.enums import ALL, COLORS, ENGINE_TYPES, TRANSMISSION_TYPES
from .models.listing import Listing
from .repository import ListingRepository
from .session import RouteDecision, SessionResolver

logger = logging.getLogger(__name__)


class MarketplaceApp:
    """Builds every component around one explicitly created connection."""

    def __init__(self, db: DatabaseManager):
        self.db = db
        self.repository = ListingRepository(db.supabase)
        self.uploader = ImageUploader(db.storage)
        self.sessions = SessionResolver(db.auth, self.repository)
        self.location = '/'

    def navigate(self, path: str) -> None:
        logger.info(f"Navigating to {path}")
        self.location = path

    def browse_controller(self) -> BrowseController:
        return BrowseController(self.repository)

    def form_controller(self) -> ListingFormController:
        return ListingFormController(self.repository, self.uploader, self.navigate)

    def dashboard_controller(self) -> DashboardController:
        return DashboardController(self.repository, self.navigate)

    async def browse(self, args: argparse.Namespace) -> int:
        controller = self.browse_controller()
        await controller.load()
        controller.set_filters(**_filters_from_args(args))

        status = controller.status
        if status is BrowseStatus.ERROR:
            print(controller.error)
            return 1
        if status is BrowseStatus.NO_DATA:
            print("No listings available")
        elif status is BrowseStatus.NO_MATCHES:
            print("No listings match your filters")
        else:
            for listing in controller.results:
                print(_format_listing(listing))
        return 0

    async def post(self, args: argparse.Namespace) -> int:
        controller = self.form_controller()
        for name in ('name', 'price', 'engine', 'engine_size', 'mileage', 'transmission',
                     'color', 'year', 'description', 'location'):
            value = getattr(args, name)
            if value is not None:
                controller.set_field(name, value)
        controller.select_files([ImageFile.from_path(path) for path in args.image or []])

        listing = await controller.submit()
        if listing is None:
            print(controller.error)
            for field_name, message in sorted(controller.field_errors.items()):
                print(f"  {field_name}: {message}")
            return 1

        print(f"Listing created successfully: {_format_listing(listing)}")
        return 0

    async def admin(self, args: argparse.Namespace) -> int:
        email = args.email or config.MARKETPLACE_EMAIL
        password = args.password or config.MARKETPLACE_PASSWORD
        try:
            if email and password:
                state = await self.sessions.sign_in(email, password)
            else:
                state = await self.sessions.resolve()
        except MarketplaceError as e:
            logger.error(f"Could not resolve the admin session: {e}")
            print(e.user_message)
            return 1

        controller = self.dashboard_controller()
        decision = await controller.activate(state)
        if decision is RouteDecision.WAIT:
            print("Sign in to open the admin dashboard")
            return 1
        if decision is RouteDecision.REDIRECT:
            print("Admin access required")
            return 1
        if controller.status is DashboardStatus.ERROR:
            print(controller.error)
            return 1

        if args.delete_listing and not await controller.delete_listing(args.delete_listing):
            print(controller.error)
            return 1
        if args.delete_user and not await controller.delete_user(args.delete_user):
            print(controller.error)
            return 1

        print(f"Listings ({len(controller.listings)}):")
        for listing in controller.listings:
            print(f"  {_format_listing(listing)}")
        print(f"Users ({len(controller.users)}):")
        for user in controller.users:
            print(f"  {user.id}  {user.email}  role={user.role}")
        return 0


def _format_listing(listing: Listing) -> str:
    return (
        f"[{listing.id}] {listing.name} {listing.year} - EUR {listing.price:,.0f}, "
        f"{listing.mileage:,} km, {listing.engine} {listing.engine_size:g}L, "
        f"{listing.transmission}, {listing.color or '-'}, {listing.location or '-'}"
    )


def _filters_from_args(args: argparse.Namespace) -> dict:
    changes = {
        'search': args.search,
        'engine': args.engine,
        'year': args.year,
        'transmission': args.transmission,
        'color': args.color,
        'location': args.location,
    }
    for name in ('price_range', 'mileage_range', 'engine_size_range'):
        bounds = getattr(args, name)
        if bounds:
            changes[name] = tuple(bounds)
    return {k: v for k, v in changes.items() if v is not None}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='marketplace', description="Vehicle marketplace")
    commands = parser.add_subparsers(dest='command', required=True)

    browse = commands.add_parser('browse', help="List listings matching filters")
    browse.add_argument('--search')
    browse.add_argument('--engine', choices=[ALL] + ENGINE_TYPES)
    browse.add_argument('--year', type=int)
    browse.add_argument('--price', dest='price_range', nargs=2, type=float, metavar=('MIN', 'MAX'))
    browse.add_argument('--mileage', dest='mileage_range', nargs=2, type=float, metavar=('MIN', 'MAX'))
    browse.add_argument('--engine-size', dest='engine_size_range', nargs=2, type=float,
                        metavar=('MIN', 'MAX'))
    browse.add_argument('--transmission', choices=[ALL] + TRANSMISSION_TYPES)
    browse.add_argument('--color', choices=[ALL] + COLORS)
    browse.add_argument('--location')

    post = commands.add_parser('post', help="Post a new car or bike")
    post.add_argument('--name', help="Brand and model")
    post.add_argument('--price')
    post.add_argument('--engine')
    post.add_argument('--engine-size', dest='engine_size')
    post.add_argument('--mileage')
    post.add_argument('--transmission')
    post.add_argument('--color')
    post.add_argument('--year')
    post.add_argument('--description')
    post.add_argument('--location')
    post.add_argument('--image', action='append', help="Image file, repeat for several")

    admin = commands.add_parser('admin', help="Admin dashboard")
    admin.add_argument('--email')
    admin.add_argument('--password')
    admin.add_argument('--delete-listing', metavar='ID')
    admin.add_argument('--delete-user', metavar='ID')

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        app = MarketplaceApp(await DatabaseManager.connect())
        return await getattr(app, args.command)(args)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        logger.error(traceback.format_exc())
        return 1


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(config.LOG_FILE)
        ]
    )


def run() -> int:
    configure_logging()
    return asyncio.run(main())
