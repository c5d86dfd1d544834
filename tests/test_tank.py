import math

import pytest

from tankduel.geometry import DrawMode
from tankduel.projectile import Projectile
from tankduel.tank import (
    DAMAGE,
    LAUNCH_OFFSET,
    TRAJECTORY_STEPS,
    Tank,
    build_tank_meshes,
)
from tankduel.terrain import Terrain


def flat(height=100.0):
    return Terrain([(x, height) for x in range(0, 1001, 10)])


def test_build_tank_meshes():
    meshes = build_tank_meshes((0.8, 0.4, 0.5), (0.9, 0.5, 0.6))
    assert meshes.base1.mesh_id == "base1"
    assert meshes.base1.vertices[0].color == (0.8, 0.4, 0.5)
    assert meshes.turret.vertices[0].color == (0.9, 0.5, 0.6)
    assert meshes.barrel.vertices[0].color == (0.0, 0.0, 0.0)
    assert meshes.life_bar.draw_mode == DrawMode.LINE_LOOP
    assert meshes.life.mesh_id == "Life"


def test_rotate_barrel_accumulates():
    tank = Tank()
    tank.rotate_barrel(0.25)
    tank.rotate_barrel(0.25)
    assert tank.barrel_angle == pytest.approx(0.5)


def test_rotate_barrel_clamps():
    tank = Tank()
    tank.rotate_barrel(10)
    assert tank.barrel_angle == pytest.approx(math.pi / 2)
    tank.rotate_barrel(-20)
    assert tank.barrel_angle == pytest.approx(-math.pi / 2)


def test_trajectory_length_and_start():
    tank = Tank()
    points = tank.generate_trajectory(10, 20, 0.0, 0.0, 125.0, 0.016, flat())
    assert len(points) == TRAJECTORY_STEPS + 1
    assert points[0] == (10.0, 20.0)
    assert tank.trajectory_points == points


def test_trajectory_with_zero_time_step_stays_put():
    tank = Tank()
    points = tank.generate_trajectory(5, 6, 0.3, 0.1, 125.0, 0.0, flat())
    assert set(points) == {(5.0, 6.0)}


def test_straight_up_shot_stays_on_vertical():
    tank = Tank()
    points = tank.generate_trajectory(50, 0, 0.0, 0.0, 125.0, 0.016, flat())
    assert all(x == pytest.approx(50.0) for x, _ in points)


def test_launch_requires_trajectory():
    tank = Tank()
    assert tank.launch_projectile([(0, 0), (1, 1)]) is None
    assert tank.active_projectiles == []


def test_launch_creates_projectile():
    tank = Tank()
    tank.generate_trajectory(0, 0, 0.0, 0.0, 125.0, 0.016, flat())
    projectile = tank.launch_projectile(tank.trajectory_points)
    assert tank.active_projectiles == [projectile]
    assert projectile.position == LAUNCH_OFFSET
    assert projectile.trajectory == tank.trajectory_points


def test_check_collision_hit_damages_other():
    shooter, target = Tank(), Tank(position=(100.0, 100.0))
    shot = Projectile((110.0, 100.0), [])
    assert shooter.check_collision(target, shot) is True
    assert target.life == pytest.approx(1.0 - DAMAGE)
    assert shooter.life == 1.0


def test_check_collision_miss():
    shooter, target = Tank(), Tank(position=(100.0, 100.0))
    shot = Projectile((500.0, 500.0), [])
    assert shooter.check_collision(target, shot) is False
    assert target.life == 1.0


def test_update_removes_projectile_on_hit():
    shooter, target = Tank(), Tank(position=(500.0, 300.0))
    shooter.active_projectiles.append(Projectile((0, 0), [(500.0, 300.0), (510.0, 300.0)]))
    shooter.update_projectiles(target, 0.016, flat())
    assert shooter.active_projectiles == []
    assert target.life == pytest.approx(1.0 - DAMAGE)


def test_update_ground_impact_deforms_terrain():
    terrain = flat()
    shooter, target = Tank(), Tank(position=(0.0, 0.0))
    shooter.active_projectiles.append(Projectile((0, 0), [(500.0, 105.0)]))
    shooter.update_projectiles(target, 0.016, terrain)
    assert shooter.active_projectiles == []
    assert terrain.height_at(500) < 100
    assert terrain.height_at(900) == 100
    assert target.life == 1.0


def test_update_in_flight_advances():
    terrain = flat()
    shooter, target = Tank(), Tank(position=(0.0, 0.0))
    shot = Projectile((0, 0), [(500.0, 400.0), (510.0, 410.0)])
    shooter.active_projectiles.append(shot)
    shooter.update_projectiles(target, 0.016, terrain)
    assert shooter.active_projectiles == [shot]
    assert shot.trajectory_index == 1
    assert shot.position == (500.0, 400.0)
    assert shot.mesh.positions == [(500.0, 400.0, 0.0)]


def test_update_drops_exhausted_projectile():
    shooter, target = Tank(), Tank(position=(0.0, 0.0))
    shot = Projectile((0, 0), [(500.0, 400.0)])
    shot.trajectory_index = 1
    shooter.active_projectiles.append(shot)
    shooter.update_projectiles(target, 0.016, flat())
    assert shooter.active_projectiles == []