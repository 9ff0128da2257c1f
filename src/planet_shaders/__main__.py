from planet_shaders.main import main

if __name__ == "__main__":
    main()
