"""
BoxWorld - трассировка лучей в комнате-коробке.

Камера движется по окружности внутри комнаты из пяти текстурированных
плоскостей; для каждого шага сохраняются изображение и карта глубины.

Запуск: python main.py [config.json]
"""

import sys
import time
from pathlib import Path

from boxworld.config import load_config
from boxworld.box_world import create_box_world, circular_trajectory
from boxworld.postprocess import to_display, depth_to_display, save_png


def main(argv=None):
    """Основная функция рендеринга."""
    argv = sys.argv[1:] if argv is None else argv
    config = load_config(argv[0] if argv else None)

    print("=" * 60)
    print("BoxWorld - трассировка лучей")
    print("=" * 60)

    # 1. Создаём сцену
    print("\n[1/3] Создание сцены...")
    scene = create_box_world(config)
    camera_id = config['camera_id']

    # 2. Траектория камеры
    print("[2/3] Траектория камеры...")
    positions, directions, ups = circular_trajectory(
        config['n_step'], config['radius'], config['camera_height']
    )

    out_dir = Path(config['output_dir'])
    out_dir.mkdir(parents=True, exist_ok=True)

    # 3. Рендеринг кадров
    camera = scene.cameras[camera_id]
    print(f"[3/3] Рендеринг {config['n_step']} кадров {camera.n_x}x{camera.n_y}, "
          f"{camera.n_aa} сэмплов/пиксель...")

    start_time = time.time()
    for step in range(config['n_step']):
        scene.move_camera_to(camera_id, positions[step])
        scene.orient_camera(camera_id, directions[step], ups[step])

        image, depth = scene.render(camera_id)

        save_png(out_dir / f"frame_{step:03d}.png", to_display(image))
        save_png(out_dir / f"depth_{step:03d}.png", depth_to_display(depth))

    elapsed = time.time() - start_time
    print(f"      Завершено за {elapsed:.1f} секунд, кадры в {out_dir}")

    print("\n" + "=" * 60)
    print("Готово!")
    print("=" * 60)


if __name__ == "__main__":
    main()
