"""命令行入口 - tmux 会话/项目选择器"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, LOG_DIR, load_config, save_default_config
from .picker import check_fzf
from .tmux_control import check_tmux

logger = logging.getLogger(__name__)

LOG_FILE = LOG_DIR / "tms.log"


def setup_logging(debug: bool = False, log_file: Path = LOG_FILE) -> None:
    """日志写入文件，避免干扰选择器的输入输出"""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tms',
        description='tmux-sessionizer - 从存活会话与项目目录中选择并进入 tmux 会话',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
列表内容:
  [Active]   正在运行的 tmux 会话（同名项目会被隐藏）
  [Project]  项目目录下找到的 git 仓库，选中后新建会话：
             nvim / lazygit / shell1 / shell2

环境变量:
  PROJECTS_DIR   项目根目录（默认 ~/Projects）
  TMUX           在 tmux 内运行时使用 switch-client 而不是 attach

使用方式:
  tms              # 打开选择器
  tms alpha        # 以 alpha 为初始查询，唯一匹配时直接进入
  tms --check      # 检查环境
  tms --init-config  # 生成默认配置文件
        """
    )

    parser.add_argument('query', nargs='?', default='', help='选择器初始查询')
    parser.add_argument('--check', '-c', action='store_true', help='检查环境')
    parser.add_argument('--version', '-v', action='store_true', help='显示版本')
    parser.add_argument('--debug', action='store_true', help='记录调试日志')
    parser.add_argument('--config', type=Path, default=None,
                        help=f'配置文件路径（默认 {DEFAULT_CONFIG_PATH}）')
    parser.add_argument('--init-config', action='store_true', help='生成默认配置文件')
    parser.add_argument('--preview', metavar='LINE', default=None, help=argparse.SUPPRESS)
    return parser


def main(argv=None) -> int:
    """主入口"""
    args = build_parser().parse_args(argv)

    if args.version:
        from . import __version__
        print(f"tmux-sessionizer v{__version__}")
        return 0

    if args.preview is not None:
        from .preview import render_preview
        print(render_preview(args.preview))
        return 0

    setup_logging(debug=args.debug)

    if args.init_config:
        path = args.config or DEFAULT_CONFIG_PATH
        if path.exists():
            print(f"配置文件已存在: {path}", file=sys.stderr)
            return 1
        print(f"已生成配置文件: {save_default_config(path)}")
        return 0

    config = load_config(args.config)

    if args.check:
        return check_environment(config)

    from .app import run
    return run(args.query, config)


def check_environment(config) -> int:
    """检查环境"""
    print("检查环境...\n")
    all_ok = True

    # tmux（必需）
    ok, msg = check_tmux()
    if ok:
        print(f"✅ tmux: {msg}")
    else:
        print(f"❌ tmux: {msg}")
        all_ok = False

    # fzf（可选，缺失时使用内置界面）
    ok, msg = check_fzf()
    if ok:
        print(f"✅ fzf: {msg}")
    elif config.picker == 'fzf':
        print(f"❌ fzf: {msg}")
        all_ok = False
    else:
        print(f"⚠️  fzf: {msg}（将使用内置选择器）")

    # Textual
    try:
        import textual
        print(f"✅ Textual: {textual.__version__}")
    except ImportError:
        print("❌ Textual: 未安装")
        if config.picker != 'fzf':
            all_ok = False

    # 项目目录
    if config.projects_dir.is_dir():
        print(f"✅ 项目目录: {config.projects_dir}")
    else:
        print(f"❌ 项目目录: {config.projects_dir} 不存在")
        all_ok = False

    print()
    if all_ok:
        print("✓ 所有检查通过")
    else:
        print("✗ 部分检查失败，请查看上方信息")

    return 0 if all_ok else 1


if __name__ == '__main__':
    sys.exit(main())
