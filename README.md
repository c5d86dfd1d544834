# tankduel

A two-player artillery game for one keyboard. Two tanks stand on a hilly
terrain made of a sum of two sine waves. Each player drives along the
ground, aims the barrel and fires a shell along a ballistic trajectory that
is drawn ahead of the barrel as a white line. Shells that come down onto the
ground blast a crater into the terrain, and steep slopes between
neighbouring terrain points slowly slide down over time. A shell that
reaches the other tank takes a tenth off its life bar; a tank whose life is
no longer above zero is no longer drawn or updated.

## Installing

```
pip install .
```

This installs the `pygame` dependency as well.

## Playing

```
tankduel
```

Options:

| Option         | Default | Meaning                              |
|----------------|---------|--------------------------------------|
| `--width N`    | 1280    | window width in pixels               |
| `--height N`   | 720     | window height in pixels              |
| `--fps N`      | 60      | frame rate cap                       |
| `--frames N`   | none    | stop after this many frames          |

Controls:

| Action        | Pink tank | Purple tank |
|---------------|-----------|-------------|
| Move left     | `A`       | `←`         |
| Move right    | `D`       | `→`         |
| Raise barrel  | `W`       | `↑`         |
| Lower barrel  | `S`       | `↓`         |
| Fire          | `Space`   | `Enter`     |

`Esc` or closing the window ends the game.

## What the game does not do

The window shows only shapes: there is no text, no score, no win message
and no way to start a new round. When one tank is destroyed the other
remains on the field until the window is closed. There is no computer
opponent, no sound and no mouse control.

## Using the pieces

The game logic does not depend on a display and can be driven directly:

- `tankduel.terrain`: `Terrain` (`height_at`, `slope_at`, `slide`,
  `deform`, `to_mesh`) and `generate_terrain(width, height, num_points)`.
- `tankduel.tank`: `Tank` (`rotate_barrel`, `generate_trajectory`,
  `launch_projectile`, `check_collision`, `update_projectiles`),
  `TankMeshes` and `build_tank_meshes`.
- `tankduel.projectile`: `Projectile`, which moves along its trajectory
  with `update`.
- `tankduel.geometry`: `Mesh`, `VertexFormat`, `VertexBoneData`,
  `DrawMode` and the shape builders `create_triangle`, `create_trapezoid`,
  `create_arc`, `create_rectangle`, `create_frame` and `create_circle`.
- `tankduel.input`: `InputState`, which buffers key, mouse, scroll and
  resize events and hands them to subscribed `InputController` objects
  once per frame with `dispatch`; `Key` names the key codes the game uses.
- `tankduel.world`: `World`, the frame loop (`tick`, `run`, `pause`,
  `exit`) with the hooks `init`, `frame_start`, `update` and `frame_end`.
- `tankduel.game`: `TankGame`, which rebuilds a list of `DrawCall`
  objects on every `update`.
- `tankduel.app`: `PygameRenderer`, which draws those calls on a pygame
  surface with world y pointing up, `translate_key` and `main`.
- `tankduel.mathutils`: angle conversion, bit-flag helpers, quaternion
  axis-angle conversion and 3×3 matrices for 2D transforms
  (`translate2d`, `rotate2d`, `scale2d`, `mat3_mul`, `transform_point`).
- `tankduel.textutils`: `join`, `path_join` and `get_parent_dir`.

A headless game step looks like this:

```python
from tankduel.game import TankGame
from tankduel.input import InputState, Key

state = InputState((1280, 720))
game = TankGame(state)
game.init()
game.update(0.016)                       # builds the aiming trajectories
game.on_key_press(Key.SPACE, 0)          # pink tank fires
for _ in range(100):
    game.update(0.016)
print(game.purple.life, len(game.draw_calls))
```

## Running the tests

```
pip install .[test]
pytest
```