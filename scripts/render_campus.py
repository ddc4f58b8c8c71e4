#!/usr/bin/env python3
import argparse, logging, sys

from campus.buildings import building_footprints, footprint_for, has_valid_center
from campus.config import load_campus_config
from campus.paths import path_polylines
from campus.store import CsvStore, RecordNotFound, paths_with_waypoints
from render.map_preview import save_building_png, save_campus_png

log = logging.getLogger(__name__)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Render campus building footprints and paths to PNG.")
    ap.add_argument('data_dir', help="directory holding buildings.csv, routes.csv, waypoints.csv")
    ap.add_argument('--config', default=None, help="campus config override (JSON)")
    ap.add_argument('--out', default='campus.png')
    ap.add_argument('--building', default=None, help="render only this building id")
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument('--markers-only', action='store_true')
    mode.add_argument('--boxes-only', action='store_true')
    ap.add_argument('-v', '--verbose', action='store_true')
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    config = load_campus_config(args.config)
    store = CsvStore(args.data_dir)

    if args.building is not None:
        try:
            record = store.get_by_id('buildings', args.building)
        except RecordNotFound as e:
            log.error("%s", e)
            return 1
        if not has_valid_center(record):
            log.error("building %s has no valid coordinates", args.building)
            return 1
        save_building_png(footprint_for(record), args.out)
        log.info("wrote %s", args.out)
        return 0

    footprints = building_footprints(store.get_all('buildings', order_by='name'))
    polylines = path_polylines(paths_with_waypoints(store))
    save_campus_png(footprints, polylines, args.out, bounds=config.bounds,
                    show_markers=not args.boxes_only, show_polygons=not args.markers_only)
    log.info("wrote %s (%d buildings, %d paths)", args.out, len(footprints), len(polylines))
    return 0


if __name__ == '__main__':
    sys.exit(main())
