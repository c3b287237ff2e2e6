import threading
import time

import pytest

from jogo.game import (
    CHARACTER,
    EMPTY,
    ENEMY,
    PORTAL,
    TRAP,
    VEGETATION,
    WALL,
    Game,
    add_random_traps,
    run_enemy,
    run_portal,
    run_random_trap,
    run_trap,
)

MAP = "▤▤▤▤▤\n▤☺ ♣▤\n▤ ☠ ▤\n▤○▲ ▤\n▤▤▤▤▤\n"


def _wait_until(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture
def game(tmp_path):
    path = tmp_path / "mapa.txt"
    path.write_text(MAP, encoding="utf-8")
    g = Game()
    g.load_map(path)
    return g


def _column_game():
    g = Game()
    g.grid = [
        [WALL, WALL, WALL],
        [WALL, ENEMY, WALL],
        [WALL, EMPTY, WALL],
        [WALL, VEGETATION, WALL],
        [WALL, WALL, WALL],
    ]
    g.x, g.y = 0, 0
    return g


def test_load_map_builds_grid(game):
    assert len(game.grid) == 5
    assert all(len(row) == 5 for row in game.grid)
    assert game.grid[0] == [WALL] * 5
    assert game.grid[1][3] == VEGETATION
    assert game.grid[2][2] == ENEMY


def test_load_map_records_player_and_clears_cell(game):
    assert (game.x, game.y) == (1, 1)
    assert (game.start_x, game.start_y) == (1, 1)
    assert game.grid[1][1] == EMPTY
    assert game.last_visited == EMPTY


def test_load_map_ignores_portal_and_trap_symbols(game):
    assert game.grid[3][1] == EMPTY
    assert game.grid[3][2] == EMPTY


def test_load_map_handles_crlf(tmp_path):
    path = tmp_path / "m.txt"
    path.write_bytes("▤▤\r\n▤☺\r\n".encode("utf-8"))
    g = Game()
    g.load_map(path)
    assert g.grid == [[WALL, WALL], [WALL, EMPTY]]
    assert (g.x, g.y) == (1, 1)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Game().load_map(tmp_path / "missing.txt")


def test_can_move_to(game):
    assert game.can_move_to(2, 1) is True
    assert game.can_move_to(3, 1) is True
    assert game.can_move_to(0, 1) is False
    assert game.can_move_to(2, 2) is False
    assert game.can_move_to(-1, 1) is False
    assert game.can_move_to(1, 99) is False
    assert game.can_move_to(99, 1) is False


def test_can_move_onto_trap(game):
    game.set_trap(2, 1, True)
    assert game.grid[2 - 1][2] == TRAP
    assert game.can_move_to(2, 1) is True
    game.set_trap(2, 1, False)
    assert game.grid[1][2] == EMPTY


def test_move_element_restores_last_visited(game):
    game.move_element(2, 1, 1, 0)
    assert game.grid[1][2] == EMPTY
    assert game.last_visited == VEGETATION
    assert game.grid[1][3] == EMPTY
    game.move_element(3, 1, -1, 0)
    assert game.grid[1][3] == VEGETATION
    assert game.last_visited == EMPTY


def test_find_start_point_fallback(game):
    assert game.find_start_point() == (1, 1)


def test_find_start_point_locates_character():
    g = Game()
    g.grid = [[EMPTY, EMPTY, EMPTY], [EMPTY, EMPTY, CHARACTER]]
    assert g.find_start_point() == (2, 1)


def test_find_free_position_is_free(game):
    for _ in range(50):
        x, y = game.find_free_position()
        assert game.grid[y][x] == EMPTY


def test_find_free_position_without_free_cell():
    g = Game()
    g.grid = [[WALL, WALL], [WALL, ENEMY]]
    with pytest.raises(ValueError):
        g.find_free_position()


def test_find_free_position_empty_map():
    with pytest.raises(ValueError):
        Game().find_free_position()


def test_step_enemy_moves_and_eats_vegetation():
    g = _column_game()
    assert g.step_enemy(1, 1, 1) == (2, 1)
    assert g.grid[1][1] == EMPTY
    assert g.grid[2][1] == ENEMY
    assert g.step_enemy(1, 2, 1) == (3, 1)
    assert g.grid[3][1] == ENEMY
    assert g.step_enemy(1, 3, 1) == (3, -1)
    assert g.grid[3][1] == ENEMY


def test_step_enemy_turns_at_player():
    g = _column_game()
    g.x, g.y = 1, 2
    assert g.step_enemy(1, 1, 1) == (1, -1)
    assert g.grid[1][1] == ENEMY
    assert g.status == "⚡ O inimigo tentou te atingir, mas mudou de direção!"


def test_step_enemy_gone():
    g = _column_game()
    assert g.step_enemy(1, 2, 1) is None


def test_notify_calls_listener():
    seen = []
    g = Game(on_change=seen.append)
    g.notify()
    assert seen == [g]


def test_run_trap_toggles_and_disarms(game):
    disarm, stop = threading.Event(), threading.Event()
    t = threading.Thread(target=run_trap, args=(game, 2, 1, disarm, stop, 0.02), daemon=True)
    t.start()
    assert _wait_until(lambda: game.grid[1][2] == TRAP)
    disarm.set()
    t.join(2)
    assert not t.is_alive()
    assert game.grid[1][2] == EMPTY
    assert game.status == "🔕 Armadilha foi desativada!"


def test_run_trap_reports_player_on_it(game):
    disarm, stop = threading.Event(), threading.Event()
    game.x, game.y = 2, 1
    t = threading.Thread(target=run_trap, args=(game, 2, 1, disarm, stop, 0.02), daemon=True)
    t.start()
    assert _wait_until(lambda: game.status == "💥 Você pisou numa armadilha!")
    stop.set()
    t.join(2)
    assert not t.is_alive()


def test_run_random_trap_sends_player_back(game):
    stop = threading.Event()
    game.x, game.y = 3, 2
    t = threading.Thread(target=run_random_trap, args=(game, 3, 2, stop, 0.02), daemon=True)
    t.start()
    assert _wait_until(
        lambda: game.status == "💥 Você caiu numa armadilha! Voltando para o início!"
    )
    stop.set()
    t.join(2)
    assert not t.is_alive()
    assert (game.x, game.y) == (1, 1)


def test_add_random_traps_starts_threads(game):
    stop = threading.Event()
    threads = add_random_traps(game, 3, stop)
    assert len(threads) == 3
    assert all(t.is_alive() for t in threads)
    stop.set()
    for t in threads:
        t.join(2)
    assert not any(t.is_alive() for t in threads)


def test_run_portal_times_out(game):
    stop = threading.Event()
    t = threading.Thread(target=run_portal, args=(game, stop, 0.05, 5.0), daemon=True)
    t.start()
    assert _wait_until(lambda: game.status == "⏱️ O portal desapareceu!")
    stop.set()
    t.join(2)
    assert not t.is_alive()
    assert all(cell != PORTAL for row in game.grid for cell in row)


def test_run_portal_entered(game):
    stop = threading.Event()

    def step_into_portal(g):
        with g.lock:
            for y, row in enumerate(g.grid):
                for x, cell in enumerate(row):
                    if cell == PORTAL:
                        g.x, g.y = x, y

    game.on_change = step_into_portal
    t = threading.Thread(target=run_portal, args=(game, stop, 2.0, 5.0), daemon=True)
    t.start()
    assert _wait_until(lambda: game.status == "🚪 Você entrou no portal a tempo!")
    stop.set()
    t.join(2)
    assert not t.is_alive()
    assert game.grid[game.y][game.x] == EMPTY


def test_run_enemy_patrols():
    g = _column_game()
    stop = threading.Event()
    t = threading.Thread(target=run_enemy, args=(g, 1, 1, stop, 0.01), daemon=True)
    t.start()
    assert _wait_until(lambda: g.grid[3][1] == ENEMY)
    stop.set()
    t.join(2)
    assert not t.is_alive()
    enemies = [cell for row in g.grid for cell in row if cell == ENEMY]
    assert len(enemies) == 1
    assert VEGETATION not in [cell for row in g.grid for cell in row]


def test_run_enemy_stops_when_enemy_removed():
    g = _column_game()
    g.grid[1][1] = EMPTY
    stop = threading.Event()
    t = threading.Thread(target=run_enemy, args=(g, 1, 1, stop, 0.01), daemon=True)
    t.start()
    t.join(2)
    assert not t.is_alive()
    assert not stop.is_set()