"""Simple entrypoint to run the outfit suggestion pipeline locally."""

import argparse
import json

from evaluation.scenarios import SCENARIOS
from stylist_app.app import OutfitSuggestionApp
from stylist_app.config import StylistConfig
from stylist_app.logging_config import configure_logging
from tools.wardrobe_store import InMemoryWardrobeStore

DEMO_USER = "demo_user"


def main() -> None:
    parser = argparse.ArgumentParser(description="Suggest outfits around one wardrobe item.")
    parser.add_argument("--wardrobe", help="JSON file of wardrobe records keyed by user id")
    parser.add_argument("--user", default=DEMO_USER)
    parser.add_argument("--item", default=SCENARIOS[0].base_item_id)
    parser.add_argument("--scenario", action="append", dest="scenario_ids")
    parser.add_argument("--season", action="append", dest="seasons")
    args = parser.parse_args()

    configure_logging()
    if args.wardrobe:
        store = InMemoryWardrobeStore.from_json_file(args.wardrobe)
    else:
        store = InMemoryWardrobeStore({DEMO_USER: SCENARIOS[0].wardrobe_items})

    app = OutfitSuggestionApp(config=StylistConfig.from_env(), wardrobe_store=store)
    response = app.suggest_outfits(args.user, args.item, scenario_ids=args.scenario_ids, seasons=args.seasons)
    print(json.dumps(response, indent=2))


if __name__ == "__main__":
    main()
