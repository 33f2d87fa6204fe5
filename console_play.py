from rules.core.errors import GameError
from rules.core.factory import GameFactory
from ledger.app.core.logging_config import configure_logging


def main():
    configure_logging()
    print("=======================================")
    print("   CONNECT FOUR: Hot Seat")
    print("=======================================")

    player1 = input("Player 1 name (X): ").strip() or "Player 1"
    player2 = input("Player 2 name (O): ").strip() or "Player 2"

    factory = GameFactory.create()
    try:
        game = factory.create_session(player1, player2)
    except GameError as e:
        print(f"Cannot start game: {e}")
        return

    print(game.render())

    while not game.status.is_finished:
        player = game.current_player
        try:
            user_input = input(f"\n{player}, your move (Columns {game.valid_columns()}): ")
            game.apply_move(player, int(user_input))
        except ValueError as e:
            # GameError is a ValueError too; int() failures land here as well
            print(e if isinstance(e, GameError) else "Please enter a valid number.")
            continue

        print("\n" + game.render())

    # --- End Game ---
    if game.winner is not None:
        print(f"\nGame Over! Winner: {game.winner}")
    else:
        print("\nGame Over! It's a Draw.")


if __name__ == "__main__":
    main()
