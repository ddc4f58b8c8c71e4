from campus.paths import path_polylines


def test_waypoints_sorted_by_sequence():
    paths = [{
        "id": "7", "path_name": "Main walkway", "path_type": "walkway",
        "waypoints": [
            {"sequence_order": "3", "latitude": "11.3", "longitude": "125.3"},
            {"sequence_order": "1", "latitude": "11.1", "longitude": "125.1"},
            {"sequence_order": "2", "latitude": "11.2", "longitude": "125.2"},
        ],
    }]
    (line,) = path_polylines(paths)
    assert line.id == "7"
    assert line.positions == [[11.1, 125.1], [11.2, 125.2], [11.3, 125.3]]


def test_missing_sequence_sorts_first():
    paths = [{"path_name": "p", "waypoints": [
        {"sequence": 2, "latitude": 1, "longitude": 1},
        {"latitude": 0, "longitude": 0},
    ]}]
    assert path_polylines(paths)[0].positions == [[0.0, 0.0], [1.0, 1.0]]


def test_bad_waypoints_dropped():
    paths = [{"path_name": "p", "waypoints": [
        {"sequence_order": 1, "latitude": "x", "longitude": "125.1"},
        {"sequence_order": 2, "latitude": "11.2", "longitude": "125.2"},
    ]}]
    assert path_polylines(paths)[0].positions == [[11.2, 125.2]]


def test_paths_without_positions_are_dropped():
    paths = [
        {"path_name": "empty", "waypoints": []},
        {"path_name": "none"},
        {"path_name": "all bad", "waypoints": [{"latitude": None, "longitude": None}]},
    ]
    assert path_polylines(paths) == []
